"""Allow ``python -m release_installer``."""

from release_installer.main import main

main()
