"""Core services: platform matching, GitHub access, download, extraction."""
