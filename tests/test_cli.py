"""Tests for CLI commands using context injection.

Commands accept a _context parameter so they can be exercised without
network access or touching the real working tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import typer
from typer.testing import CliRunner

from andraste_bundler import __version__, cli
from andraste_bundler.config import BundlerConfig
from andraste_bundler.context import AppContext
from andraste_bundler.errors import ReleaseNotFound
from andraste_bundler.types import BundleSettings, RepoSpec


@pytest.fixture
def mock_orchestrator(tmp_path: Path) -> MagicMock:
    """Create a mock BundleOrchestrator."""
    orchestrator = MagicMock()
    orchestrator.create_bundle = AsyncMock(return_value=tmp_path / "dist" / "AndrasteBundle-v1.zip")
    return orchestrator


@pytest.fixture
def mock_github() -> MagicMock:
    """Create a mock GitHubReleases."""
    github = MagicMock()
    github.aclose = AsyncMock()
    return github


@pytest.fixture
def mock_context(
    tmp_path: Path, mock_orchestrator: MagicMock, mock_github: MagicMock
) -> AppContext:
    """Create a mock AppContext with all dependencies."""
    return AppContext(
        config=BundlerConfig(output_dir=tmp_path / "out", dist_dir=tmp_path / "dist"),
        github=mock_github,
        filesystem=MagicMock(),
        orchestrator=mock_orchestrator,
    )


class TestCreateBundleCommand:
    """Tests for the create-bundle command."""

    def test_success(self, mock_context: AppContext) -> None:
        """Test settings are forwarded and the client is closed."""
        cli.create_bundle(
            version="v1",
            framework_repo=None,
            readme_template=None,
            _context=mock_context,
        )

        mock_context.orchestrator.create_bundle.assert_awaited_once_with(BundleSettings(version="v1"))
        mock_context.github.aclose.assert_awaited_once()

    def test_framework_repo_and_template(self, mock_context: AppContext, tmp_path: Path) -> None:
        """Test optional arguments are parsed into settings."""
        template = tmp_path / "README.tpl"

        cli.create_bundle(
            version="v2",
            framework_repo="me/Payload.Custom",
            readme_template=template,
            _context=mock_context,
        )

        settings = mock_context.orchestrator.create_bundle.await_args.args[0]
        assert settings.framework_repo == RepoSpec("me", "Payload.Custom")
        assert settings.readme_template_path == template

    def test_invalid_framework_repo(self, mock_context: AppContext) -> None:
        """Test a malformed repository exits before any work starts."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.create_bundle(
                version="v1",
                framework_repo="not-a-repo",
                readme_template=None,
                _context=mock_context,
            )

        assert exc_info.value.exit_code == 1
        mock_context.orchestrator.create_bundle.assert_not_called()

    def test_bundle_error_exits(self, mock_context: AppContext) -> None:
        """Test domain errors exit non-zero and still close the client."""
        mock_context.orchestrator.create_bundle.side_effect = ReleaseNotFound("o", "r", "v1")

        with pytest.raises(typer.Exit) as exc_info:
            cli.create_bundle(
                version="v1",
                framework_repo=None,
                readme_template=None,
                _context=mock_context,
            )

        assert exc_info.value.exit_code == 1
        mock_context.github.aclose.assert_awaited_once()

    def test_filesystem_error_exits(self, mock_context: AppContext) -> None:
        """Test OS errors exit non-zero."""
        mock_context.orchestrator.create_bundle.side_effect = PermissionError("denied")

        with pytest.raises(typer.Exit) as exc_info:
            cli.create_bundle(
                version="v1",
                framework_repo=None,
                readme_template=None,
                _context=mock_context,
            )

        assert exc_info.value.exit_code == 1


class TestClearCommand:
    """Tests for the clear command."""

    def test_success(self, mock_context: AppContext) -> None:
        """Test clear delegates to the orchestrator and closes the client."""
        cli.clear(_context=mock_context)

        mock_context.orchestrator.clear.assert_called_once_with()
        mock_context.github.aclose.assert_awaited_once()

    def test_failure(self, mock_context: AppContext) -> None:
        """Test filesystem errors exit non-zero."""
        mock_context.orchestrator.clear.side_effect = PermissionError("denied")

        with pytest.raises(typer.Exit) as exc_info:
            cli.clear(_context=mock_context)

        assert exc_info.value.exit_code == 1
        mock_context.github.aclose.assert_awaited_once()


class TestAppInvocation:
    """Tests that go through Typer's argument parsing."""

    def test_version(self) -> None:
        """Test --version prints the tool version."""
        result = CliRunner().invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_create_bundle_requires_version(self) -> None:
        """Test create-bundle without --version is a usage error."""
        result = CliRunner().invoke(cli.app, ["create-bundle"])
        assert result.exit_code == 2

    def test_clear_runs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test clear through the CLI removes the configured directory."""
        out = tmp_path / "out"
        out.mkdir()
        monkeypatch.setenv("ANDRASTE_BUNDLER_OUTPUT_DIR", str(out))

        result = CliRunner().invoke(cli.app, ["-v", "clear"])

        assert result.exit_code == 0
        assert not out.exists()


class TestLogLevel:
    """Tests for verbosity mapping."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "level"),
        [
            (0, False, logging.WARNING),
            (1, False, logging.INFO),
            (2, False, logging.DEBUG),
            (3, False, logging.DEBUG),
            (2, True, logging.ERROR),
        ],
    )
    def test_levels(self, verbose: int, quiet: bool, level: int) -> None:
        """Test flags map to logging levels."""
        from andraste_bundler.console import log_level

        assert log_level(verbose, quiet) == level
