"""Utility helpers for mapping request paths onto the site root."""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath
from typing import Iterable

import aiofiles.os

from docsite.errors import NotFound, PathEscape
from docsite.models import SafePath


def _is_contained(root: PurePosixPath, candidate: PurePosixPath) -> bool:
    """Segment-wise containment, so ``/srv/site-evil`` is not under ``/srv/site``."""
    return candidate.parts[: len(root.parts)] == root.parts


def resolve_safe_path(root: Path, requested: str) -> SafePath:
    """Join ``requested`` to ``root`` and normalize it lexically.

    No filesystem access happens here. Backslashes count as separators so
    mixed-style traversal (``..\\..\\etc``) is normalized like ``../../etc``.

    Raises:
        PathEscape: the normalized path is not ``root`` or below it.
    """
    if "\0" in requested:
        raise PathEscape()

    root_posix = PurePosixPath(posixpath.normpath(Path(root).as_posix()))
    relative = requested.replace("\\", "/").lstrip("/")
    joined = posixpath.normpath(posixpath.join(str(root_posix), relative))
    candidate = PurePosixPath(joined)

    if not _is_contained(root_posix, candidate):
        raise PathEscape()
    return SafePath(root=Path(root_posix), path=Path(candidate))


def is_servable(
    safe_path: SafePath,
    allowed_dirs: Iterable[str],
    public_files: Iterable[str],
    private_files: Iterable[Path] = (),
) -> bool:
    """Check the allow-list: an allowed top-level directory or public file.

    ``private_files`` are refused even inside an allowed directory.
    """
    parts = safe_path.relative.parts
    if not parts:
        return False
    hidden = {Path(posixpath.normpath(Path(p).as_posix())) for p in private_files}
    if safe_path.path in hidden:
        return False
    if len(parts) == 1 and parts[0] in set(public_files):
        return True
    return len(parts) > 1 and parts[0] in set(allowed_dirs)


async def resolve_entry_document(safe_path: SafePath, entry_document: str) -> SafePath:
    """Redirect a directory request to its entry document.

    Non-directories are returned unchanged.

    Raises:
        NotFound: the directory has no entry document.
    """
    if not await aiofiles.os.path.isdir(safe_path.path):
        return safe_path
    entry = SafePath(root=safe_path.root, path=safe_path.path / entry_document)
    if not await aiofiles.os.path.isfile(entry.path):
        raise NotFound()
    return entry
