"""Top-level package for lens-migrate.

Settings migration run once per startup: compares the recorded previous
version with the running one and upgrades the user's settings documents.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lens-migrate")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
