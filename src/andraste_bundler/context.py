"""Application context for dependency injection.

Separates object creation from object use: CLI commands receive an
AppContext, production code builds one with create_context(), and tests
construct AppContext directly with test doubles.
"""

from __future__ import annotations

from dataclasses import dataclass

from andraste_bundler.bundle import BundleOrchestrator
from andraste_bundler.config import BundlerConfig
from andraste_bundler.github import GitHubReleases
from andraste_bundler.protocols import FileSystem


@dataclass
class AppContext:
    """Container for application dependencies.

    ``github`` owns the HTTP client shared by every remote call and must be
    closed once the run is over.
    """

    config: BundlerConfig
    github: GitHubReleases
    filesystem: FileSystem
    orchestrator: BundleOrchestrator


def create_context(config: BundlerConfig | None = None) -> AppContext:
    """Factory for application dependencies.

    Args:
        config: Override configuration. Defaults to BundlerConfig.from_env().

    Returns:
        Configured AppContext with all dependencies wired.
    """
    from andraste_bundler.assembler import LayoutAssembler
    from andraste_bundler.fetch import AssetFetcher
    from andraste_bundler.filesystem import RealFileSystem

    config = config or BundlerConfig.from_env()
    filesystem = RealFileSystem()
    github = GitHubReleases.create(config)
    assembler = LayoutAssembler(
        locator=github,
        fetcher=AssetFetcher(github),
        filesystem=filesystem,
    )
    orchestrator = BundleOrchestrator(config=config, assembler=assembler, filesystem=filesystem)

    return AppContext(
        config=config,
        github=github,
        filesystem=filesystem,
        orchestrator=orchestrator,
    )
