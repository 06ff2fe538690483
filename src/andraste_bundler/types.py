"""Shared data types for the bundler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BundleSettings",
    "BundleState",
    "DEFAULT_FRAMEWORK_REPO",
    "Release",
    "ReleaseAsset",
    "RepoSpec",
]


@dataclass(frozen=True)
class RepoSpec:
    """A GitHub repository identified by organisation and name.

    Attributes:
        organisation: Owning user or organisation.
        repository: Repository name.
    """

    organisation: str
    repository: str

    @classmethod
    def parse(cls, value: str) -> RepoSpec:
        """Parse an ``organisation/repository`` string.

        Args:
            value: String with exactly one ``/`` separator.

        Returns:
            The parsed RepoSpec.

        Raises:
            ValueError: If the separator count is not exactly one.
        """
        parts = value.split("/")
        if len(parts) != 2:
            raise ValueError("Repository must be in the format 'organisation/repository'")
        return cls(organisation=parts[0], repository=parts[1])

    def __str__(self) -> str:
        return f"{self.organisation}/{self.repository}"


DEFAULT_FRAMEWORK_REPO = RepoSpec("AndrasteFramework", "Payload.Generic")


class ReleaseAsset(BaseModel):
    """A downloadable file attached to a release."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    download_url: str = Field(alias="browser_download_url")


class Release(BaseModel):
    """A tagged release as returned by the GitHub API."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    tag_name: str = ""
    assets: list[ReleaseAsset] = Field(default_factory=list)


@dataclass(frozen=True)
class BundleSettings:
    """User input for a single bundle run.

    Attributes:
        version: Tag used for every release lookup.
        framework_repo: Override for the generic payload repository.
        readme_template_path: Optional README template file.
    """

    version: str
    framework_repo: RepoSpec | None = None
    readme_template_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.version:
            raise ValueError("version cannot be empty")

    @property
    def effective_framework_repo(self) -> RepoSpec:
        """Repository the generic payload is fetched from."""
        return self.framework_repo or DEFAULT_FRAMEWORK_REPO


class BundleState(str, Enum):
    """Lifecycle of a bundle run."""

    INIT = "init"
    FETCHING = "fetching"
    PACKAGING = "packaging"
    DONE = "done"
    FAILED = "failed"
