"""Runtime configuration for the bundler."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

# Working tree and distribution directories, relative to the current directory
OUTPUT_DIR = Path("out")
DIST_DIR = Path("dist")

GITHUB_API_URL = "https://api.github.com"


class BundlerConfig(BaseModel):
    """Locations and remote endpoint used by a bundle run."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path = OUTPUT_DIR
    dist_dir: Path = DIST_DIR
    api_url: str = GITHUB_API_URL
    token: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BundlerConfig:
        """Build configuration from environment variables.

        Recognized variables: ``GITHUB_TOKEN``, ``GITHUB_API_URL``,
        ``ANDRASTE_BUNDLER_OUTPUT_DIR`` and ``ANDRASTE_BUNDLER_DIST_DIR``.
        Unset variables fall back to the defaults.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Populated BundlerConfig.
        """
        env = os.environ if environ is None else environ
        return cls(
            output_dir=Path(env.get("ANDRASTE_BUNDLER_OUTPUT_DIR", OUTPUT_DIR)),
            dist_dir=Path(env.get("ANDRASTE_BUNDLER_DIST_DIR", DIST_DIR)),
            api_url=env.get("GITHUB_API_URL", GITHUB_API_URL).rstrip("/"),
            token=env.get("GITHUB_TOKEN") or None,
        )
