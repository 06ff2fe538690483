"""Concurrent assembly of the bundle's fixed directory layout.

The working tree looks like this once every task has finished::

    out/
        x64/, x86/            UI launcher (extracted at the root)
        GenericFramework/
            x64/              launcher x64 + generic payload copy
            x86/              launcher x86 + generic payload
        README.txt

Each task writes to its own subdirectories, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

from andraste_bundler.errors import AssetNotFound, UnexpectedAssetCount
from andraste_bundler.fetch import AssetFetcher
from andraste_bundler.protocols import FileSystem, ReleaseLocator
from andraste_bundler.types import ReleaseAsset, RepoSpec

logger = logging.getLogger(__name__)

UI_LAUNCHER_REPO = RepoSpec("AndrasteFramework", "UILauncher")
LAUNCHER_REPO = RepoSpec("AndrasteFramework", "Andraste.Launcher")

FRAMEWORK_DIR = "GenericFramework"
ARCHITECTURES = ("x64", "x86")


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and fail if any of them failed.

    Every awaitable runs to completion; siblings of a failing task are not
    cancelled. The first exception in argument order is re-raised.

    Returns:
        Results in argument order.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


def select_by_architecture(assets: list[ReleaseAsset], architecture: str) -> ReleaseAsset:
    """Pick the first asset whose name contains the architecture tag.

    Raises:
        AssetNotFound: If no asset name contains the tag.
    """
    for asset in assets:
        if architecture in asset.name:
            return asset
    raise AssetNotFound(f"Could not find {architecture} asset")


class LayoutAssembler:
    """Fetches release assets into the fixed subdirectories of the working tree."""

    def __init__(
        self,
        locator: ReleaseLocator,
        fetcher: AssetFetcher,
        filesystem: FileSystem,
    ) -> None:
        self.locator = locator
        self.fetcher = fetcher
        self.fs = filesystem

    async def _locate(self, repo: RepoSpec, version: str, expected: int) -> list[ReleaseAsset]:
        """Locate a release and check it carries the expected asset count."""
        assets = await self.locator.locate(repo.organisation, repo.repository, version)
        if len(assets) != expected:
            raise UnexpectedAssetCount(str(repo), expected, len(assets))
        return assets

    async def fetch_ui_launcher(self, version: str, root: Path) -> None:
        """Extract the single UI launcher asset directly into the bundle root."""
        assets = await self._locate(UI_LAUNCHER_REPO, version, expected=1)
        await self.fetcher.fetch(assets[0], root)

    async def fetch_launcher(self, version: str, framework_dir: Path) -> None:
        """Extract the x64 and x86 launcher assets into their subdirectories.

        Both downloads run concurrently and must both succeed.

        Raises:
            UnexpectedAssetCount: If the release does not carry exactly two assets.
            AssetNotFound: If either architecture has no matching asset.
        """
        assets = await self._locate(LAUNCHER_REPO, version, expected=2)
        # An asset matching both tags lands in both buckets.
        selected = {arch: select_by_architecture(assets, arch) for arch in ARCHITECTURES}
        await gather_all(
            *(self.fetcher.fetch(asset, framework_dir / arch) for arch, asset in selected.items())
        )

    async def fetch_generic_payload(self, repo: RepoSpec, version: str, framework_dir: Path) -> None:
        """Extract the generic payload into x86, then mirror it into x64.

        The payload is architecture independent, so one download serves both
        targets. Only the entries the payload wrote are copied, and files the
        launcher already placed in x64 are kept. The copy runs in a worker
        thread to keep the event loop free for in-flight downloads.
        """
        assets = await self._locate(repo, version, expected=1)
        x86_dir = framework_dir / "x86"
        x64_dir = framework_dir / "x64"
        entries = await self.fetcher.fetch(assets[0], x86_dir)
        await asyncio.to_thread(self.fs.mirror, x86_dir, x64_dir, entries)
        logger.debug("Mirrored %s into %s", x86_dir, x64_dir)

    def tasks(self, version: str, framework_repo: RepoSpec, root: Path) -> list[Awaitable[None]]:
        """Build the three layout coroutines for a run, unstarted."""
        framework_dir = root / FRAMEWORK_DIR
        return [
            self.fetch_ui_launcher(version, root),
            self.fetch_launcher(version, framework_dir),
            self.fetch_generic_payload(framework_repo, version, framework_dir),
        ]

    async def assemble(self, version: str, framework_repo: RepoSpec, root: Path) -> None:
        """Run all layout tasks concurrently; any failure fails the whole assembly."""
        await gather_all(*self.tasks(version, framework_repo, root))
