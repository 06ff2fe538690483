"""Assemble Andraste release bundles from GitHub release assets."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from andraste_bundler.protocols import (
    AssetDownloader,
    FileSystem,
    ReleaseLocator,
)

__all__ = [
    "__version__",
    "AssetDownloader",
    "FileSystem",
    "ReleaseLocator",
]
