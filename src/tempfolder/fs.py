"""Filesystem primitives for creating and removing temporary folders."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)


def make_temp_dir(prefix: str, root: Path | None = None) -> Path:
    """Create a new uniquely named directory below ``root`` (platform temp dir by default)."""
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=root)).resolve()
    logger.debug("Created temporary folder %s", path)
    return path


def _raise(error: OSError) -> None:
    raise error


def delete_tree(path: Path) -> None:
    """Delete ``path`` and everything below it, children before their parent.

    Symbolic links are unlinked and never followed. The first failing removal
    raises and stops the walk, so residual entries may remain on disk.
    """
    for dirpath, dirnames, filenames in os.walk(path, topdown=False, onerror=_raise):
        for name in filenames:
            os.unlink(os.path.join(dirpath, name))
        for name in dirnames:
            entry = os.path.join(dirpath, name)
            # os.walk lists links to directories here but does not descend into them
            if os.path.islink(entry):
                os.unlink(entry)
            else:
                os.rmdir(entry)
    os.rmdir(path)
    logger.debug("Deleted temporary folder %s", path)


def find_orphans(prefix: str, root: Path | None = None) -> list[Path]:
    """Return directories in ``root`` whose name starts with ``prefix``."""
    base = Path(root) if root is not None else Path(tempfile.gettempdir())
    if not base.is_dir():
        return []
    return sorted(
        entry
        for entry in base.iterdir()
        if entry.name.startswith(prefix) and entry.is_dir() and not entry.is_symlink()
    )


def tree_size(path: Path) -> int:
    """Total size in bytes of regular files below ``path``.

    Best effort: unreadable folders and entries removed during the walk are
    not counted.
    """
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            entry = os.path.join(dirpath, name)
            if os.path.islink(entry):
                continue
            try:
                total += os.path.getsize(entry)
            except FileNotFoundError:
                logger.debug("%s vanished while measuring %s", entry, path)
    return total
