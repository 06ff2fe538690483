"""Zip extraction and packaging for release assets and the final bundle."""

from __future__ import annotations

import io
import logging
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from andraste_bundler.errors import ArchiveCorrupt, InvalidPathEncoding

logger = logging.getLogger(__name__)

# Maximum deflate level for bundle entries
COMPRESSION_LEVEL = 9

# Raised by zipfile for damaged headers, streams, and unsupported methods
CORRUPTION_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError)


def enclosed_name(name: str) -> PurePosixPath | None:
    """Resolve an archive entry name to a path that stays inside the target.

    Both ``/`` and ``\\`` count as separators. ``.`` components are dropped
    and ``..`` components pop the previous one.

    Args:
        name: Raw entry name from the archive.

    Returns:
        The normalized relative path, or None if the name is absolute,
        carries a drive letter or NUL byte, climbs above the root, or is empty.

    Example:
        >>> enclosed_name("a/./b/../c.txt")
        PurePosixPath('a/c.txt')
        >>> enclosed_name("../evil") is None
        True
    """
    if "\0" in name:
        return None
    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or (len(normalized) > 1 and normalized[1] == ":"):
        return None

    parts: list[str] = []
    for part in normalized.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
            continue
        parts.append(part)

    if not parts:
        return None
    return PurePosixPath(*parts)


def extract_archive(data: bytes, destination: Path) -> list[PurePosixPath]:
    """Extract an in-memory zip archive below a destination directory.

    Directory entries are created with all ancestors. An entry counts as a
    directory when its name ends in ``/`` or ``\\``. File entries create
    their parent lazily, since archives may list files without a preceding
    directory entry. Existing siblings in the destination are left alone.
    Entries whose names escape the destination are skipped.

    Args:
        data: Raw zip bytes.
        destination: Directory to extract into.

    Returns:
        Relative paths of the directories and files written, in archive order.

    Raises:
        ArchiveCorrupt: If the bytes are not a valid zip or an entry is damaged.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except CORRUPTION_ERRORS as e:
        raise ArchiveCorrupt(f"Not a valid zip archive: {e}") from e

    written: list[PurePosixPath] = []
    with archive:
        for info in archive.infolist():
            relative = enclosed_name(info.filename)
            if relative is None:
                logger.debug("Skipping unsafe archive entry %r", info.filename)
                continue

            target = destination.joinpath(*relative.parts)
            if info.filename.endswith(("/", "\\")):
                target.mkdir(parents=True, exist_ok=True)
                written.append(relative)
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            try:
                with archive.open(info) as source, target.open("wb") as sink:
                    shutil.copyfileobj(source, sink)
            except CORRUPTION_ERRORS as e:
                raise ArchiveCorrupt(f"Corrupt archive entry {info.filename!r}: {e}") from e
            written.append(relative)

    return written


def _entry_name(path: Path, root: Path) -> str:
    """Convert a path below root to a forward-slash entry name.

    Raises:
        InvalidPathEncoding: If the relative path is not valid text.
    """
    name = path.relative_to(root).as_posix()
    if name == ".":
        return ""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathEncoding(f"{name!r} is not valid UTF-8") from e
    return name


def pack_directory(source: Path, destination: Path) -> None:
    """Package a directory tree into a zip archive.

    All directory entries are written before any file entry, both in sorted
    order. The root directory itself is not an entry.

    Args:
        source: Directory to package.
        destination: Zip file to create (overwritten if present).

    Raises:
        InvalidPathEncoding: If any relative path cannot be encoded as text.
    """
    dirs: list[tuple[Path, str]] = []
    files: list[tuple[Path, str]] = []
    for path in sorted(source.rglob("*")):
        name = _entry_name(path, source)
        if not name:
            continue
        if path.is_dir():
            dirs.append((path, name))
        else:
            files.append((path, name))

    with zipfile.ZipFile(
        destination,
        "w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=COMPRESSION_LEVEL,
    ) as archive:
        for path, name in dirs:
            archive.write(path, name)
        for path, name in files:
            archive.write(path, name)

    logger.debug("Packed %d directories and %d files into %s", len(dirs), len(files), destination)
