"""Top-level package for release-installer.

License: MIT
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("release-installer")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
