"""Top-level sequencing of a bundle run."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from andraste_bundler.archive import pack_directory
from andraste_bundler.assembler import FRAMEWORK_DIR, LayoutAssembler, gather_all
from andraste_bundler.config import BundlerConfig
from andraste_bundler.protocols import FileSystem
from andraste_bundler.readme import build_readme
from andraste_bundler.types import BundleSettings, BundleState

logger = logging.getLogger(__name__)


def archive_name(version: str) -> str:
    """File name of the packaged bundle for a version."""
    return f"AndrasteBundle-{version}.zip"


class BundleOrchestrator:
    """Creates the working tree, fills it, and packages it.

    A failed run leaves whatever was already written on disk so it can be
    inspected; ``clear()`` resets the working tree.
    """

    def __init__(
        self,
        config: BundlerConfig,
        assembler: LayoutAssembler,
        filesystem: FileSystem,
    ) -> None:
        self.config = config
        self.assembler = assembler
        self.fs = filesystem
        self.state = BundleState.INIT

    def _transition(self, state: BundleState) -> None:
        logger.debug("Bundle state %s -> %s", self.state.value, state.value)
        self.state = state

    async def create_bundle(self, settings: BundleSettings) -> Path:
        """Assemble and package a bundle.

        Args:
            settings: Version and overrides for this run.

        Returns:
            Path to the packaged archive.

        Raises:
            BundleError: If any fetch, render, or packaging step fails.
            OSError: On filesystem errors.
        """
        started = time.perf_counter()
        root = self.config.output_dir
        self._transition(BundleState.INIT)

        try:
            self.fs.mkdir(root, parents=True, exist_ok=True)
            self.fs.mkdir(root / FRAMEWORK_DIR, parents=True, exist_ok=True)

            self._transition(BundleState.FETCHING)
            await gather_all(
                *self.assembler.tasks(settings.version, settings.effective_framework_repo, root),
                build_readme(settings, root, self.fs),
            )

            self._transition(BundleState.PACKAGING)
            self.fs.mkdir(self.config.dist_dir, parents=True, exist_ok=True)
            archive_path = self.config.dist_dir / archive_name(settings.version)
            pack_directory(root, archive_path)
        except Exception:
            self._transition(BundleState.FAILED)
            raise

        self._transition(BundleState.DONE)
        logger.info("Compiled bundle in %.2fs", time.perf_counter() - started)
        return archive_path

    def clear(self) -> None:
        """Remove the working tree. A missing directory counts as cleared."""
        try:
            self.fs.rmtree(self.config.output_dir)
        except FileNotFoundError:
            pass
        logger.info("Cleared output directory")
