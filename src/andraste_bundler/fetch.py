"""Download a release asset and unpack it into the working tree."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from andraste_bundler.archive import extract_archive
from andraste_bundler.protocols import AssetDownloader
from andraste_bundler.types import ReleaseAsset

logger = logging.getLogger(__name__)


class AssetFetcher:
    """Fetches zip assets and extracts them at a path prefix."""

    def __init__(self, downloader: AssetDownloader) -> None:
        self.downloader = downloader

    async def fetch(self, asset: ReleaseAsset, destination: Path) -> list[PurePosixPath]:
        """Download an asset fully, then extract it below destination.

        Returns:
            Relative paths of the entries written below destination.

        Raises:
            DownloadFailure: If the download fails.
            ArchiveCorrupt: If the body is not a valid zip archive.
        """
        logger.info("Downloading %s from %s", asset.name, asset.download_url)
        data = await self.downloader.download(asset)
        entries = extract_archive(data, destination)
        logger.debug("Extracted %d entries of %s into %s", len(entries), asset.name, destination)
        return entries
