"""GitHub release lookups and asset downloads."""

from __future__ import annotations

import logging

import httpx

from andraste_bundler import __version__
from andraste_bundler.config import BundlerConfig
from andraste_bundler.errors import DownloadFailure, ReleaseNotFound, RemoteFailure
from andraste_bundler.types import Release, ReleaseAsset

logger = logging.getLogger(__name__)


class GitHubReleases:
    """Client for the GitHub releases API.

    Satisfies both the ReleaseLocator and AssetDownloader protocols. The
    underlying httpx client is shared by every component that needs remote
    access and must be closed with ``aclose()``.
    """

    def __init__(self, client: httpx.AsyncClient, api_url: str) -> None:
        """Initialize with an explicit HTTP client.

        Args:
            client: Configured async HTTP client.
            api_url: Base URL of the GitHub REST API.

        Note:
            Prefer the factory method `create()` in production code.
        """
        self.client = client
        self.api_url = api_url.rstrip("/")

    @classmethod
    def create(cls, config: BundlerConfig) -> GitHubReleases:
        """Create a client from configuration.

        Args:
            config: Bundler configuration.

        Returns:
            GitHubReleases with its own httpx client.
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"andraste-bundler/{__version__}",
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        client = httpx.AsyncClient(headers=headers, follow_redirects=True, timeout=None)
        return cls(client=client, api_url=config.api_url)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def locate(self, organisation: str, repository: str, tag: str) -> list[ReleaseAsset]:
        """Resolve the assets published under a release tag.

        Args:
            organisation: Repository owner.
            repository: Repository name.
            tag: Release tag.

        Returns:
            Assets of the release.

        Raises:
            ReleaseNotFound: If the API answers 404.
            RemoteFailure: On any other HTTP or transport error.
        """
        url = f"{self.api_url}/repos/{organisation}/{repository}/releases/tags/{tag}"
        try:
            response = await self.client.get(url)
            if response.status_code == httpx.codes.NOT_FOUND:
                raise ReleaseNotFound(organisation, repository, tag)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteFailure(f"Release lookup for {organisation}/{repository}@{tag} failed: {e}") from e

        try:
            release = Release.model_validate(response.json())
        except ValueError as e:
            raise RemoteFailure(f"Unexpected release payload from {url}: {e}") from e
        logger.info(
            "Found release %s for %s/%s/%s",
            release.name or "N/A",
            organisation,
            repository,
            tag,
        )
        return release.assets

    async def download(self, asset: ReleaseAsset) -> bytes:
        """Download an asset body into memory.

        Args:
            asset: Asset to download.

        Returns:
            Raw bytes of the asset.

        Raises:
            DownloadFailure: On HTTP or transport errors.
        """
        try:
            response = await self.client.get(
                asset.download_url, headers={"Accept": "application/octet-stream"}
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DownloadFailure(f"Download of {asset.name} failed: {e}") from e
        return response.content
