"""README manifest rendering."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from importlib import resources
from pathlib import Path
from string import Template

from andraste_bundler.errors import ManifestTemplateError
from andraste_bundler.protocols import FileSystem
from andraste_bundler.types import BundleSettings

README_NAME = "README.txt"


def default_template() -> str:
    """Load the README template shipped with the package."""
    return resources.files("andraste_bundler").joinpath("templates/README.tpl").read_text(encoding="utf-8")


def render_manifest(template: str, parameters: Mapping[str, str]) -> str:
    """Fill ``${KEY}`` placeholders in a template.

    Placeholders without a matching parameter are left as-is.

    Example:
        >>> render_manifest("v${RELEASE}", {"RELEASE": "1.0"})
        'v1.0'
    """
    return Template(template).safe_substitute(parameters)


def manifest_parameters(version: str, today: date) -> dict[str, str]:
    """Template parameters for a release on a given day.

    MONTH and DAY are zero-based.
    """
    return {
        "RELEASE": version,
        "YEAR": str(today.year),
        "MONTH": str(today.month - 1),
        "DAY": str(today.day - 1),
    }


async def build_readme(
    settings: BundleSettings,
    root: Path,
    filesystem: FileSystem,
    today: date | None = None,
) -> Path:
    """Render README.txt into the bundle root.

    Args:
        settings: Bundle settings (version and optional template path).
        root: Bundle root directory.
        filesystem: Filesystem abstraction.
        today: Date to stamp. Defaults to the current UTC date.

    Returns:
        Path of the written README.

    Raises:
        ManifestTemplateError: If a custom template cannot be read.
    """
    if settings.readme_template_path is not None:
        try:
            template = filesystem.read_text(settings.readme_template_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestTemplateError(
                f"Failed to read the readme template from {settings.readme_template_path}: {e}"
            ) from e
    else:
        template = default_template()

    stamp = today or datetime.now(timezone.utc).date()
    content = render_manifest(template, manifest_parameters(settings.version, stamp))

    readme_path = root / README_NAME
    filesystem.write_text(readme_path, content)
    return readme_path
