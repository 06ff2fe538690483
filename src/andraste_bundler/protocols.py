"""Protocol definitions for the bundler's collaborators.

Components receive their collaborators through these interfaces so that the
remote API and the filesystem can be swapped for test doubles. Concrete
implementations satisfy them structurally.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from andraste_bundler.types import ReleaseAsset


@runtime_checkable
class ReleaseLocator(Protocol):
    """Resolves the assets published under a release tag."""

    async def locate(self, organisation: str, repository: str, tag: str) -> list[ReleaseAsset]:
        """Look up the assets of one release.

        Args:
            organisation: Repository owner.
            repository: Repository name.
            tag: Release tag.

        Returns:
            Assets attached to the release, in API order.

        Raises:
            ReleaseNotFound: If no release matches the tag.
            RemoteFailure: On any other transport or API error.
        """
        ...


@runtime_checkable
class AssetDownloader(Protocol):
    """Downloads the body of a release asset."""

    async def download(self, asset: ReleaseAsset) -> bytes:
        """Download an asset fully into memory.

        Args:
            asset: Asset to download.

        Returns:
            The raw asset bytes.

        Raises:
            DownloadFailure: On transport or HTTP errors.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    """

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        ...

    def mirror(self, src: Path, dst: Path, entries: Sequence[PurePosixPath]) -> None:
        """Copy the given relative entries from src into dst.

        Files already present in dst are kept, not overwritten.
        """
        ...
