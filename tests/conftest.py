"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fakes import FakeReleases, build_zip


@pytest.fixture
def make_zip() -> Callable[[dict[str, bytes | None]], bytes]:
    """Factory for in-memory zip archives."""
    return build_zip


@pytest.fixture
def fake_releases() -> FakeReleases:
    """Create an empty fake release source."""
    return FakeReleases()


@pytest.fixture
def publish_standard_release(
    fake_releases: FakeReleases,
) -> Callable[[str], FakeReleases]:
    """Publish UI launcher, launcher, and generic payload releases for a tag."""

    def _publish(tag: str = "v1.0.0") -> FakeReleases:
        fake_releases.publish(
            "AndrasteFramework/UILauncher",
            tag,
            {"UILauncher.zip": build_zip({"x64/UILauncher.exe": b"ui64", "x86/UILauncher.exe": b"ui86"})},
        )
        fake_releases.publish(
            "AndrasteFramework/Andraste.Launcher",
            tag,
            {
                "launcher-x86.zip": build_zip({"Launcher.exe": b"launcher86"}),
                "launcher-x64.zip": build_zip({"Launcher.exe": b"launcher64"}),
            },
        )
        fake_releases.publish(
            "AndrasteFramework/Payload.Generic",
            tag,
            {"payload.zip": build_zip({"a/": None, "a/b.txt": b"payload"})},
        )
        return fake_releases

    return _publish


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.read_text.return_value = ""
    return fs


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Create a working tree root."""
    root = tmp_path / "out"
    root.mkdir()
    return root
