"""Filesystem primitives: symlink-aware queries, tree copy, backup and link creation.

Every higher layer builds on these. Missing preconditions (absent source,
absent destination) are benign: queries return a false/empty sentinel and
mutations become no-ops. Only genuine I/O failures propagate.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"

# Version control, dependency and cache directories never copied
SKIP_NAMES = frozenset({
    ".git",
    ".svn",
    ".hg",
    "node_modules",
    ".cache",
    "__pycache__",
    ".DS_Store",
})

# Per-file copy failures that are swallowed during a tree walk
_BENIGN_ERRNOS = frozenset({errno.ENOENT, errno.EACCES, errno.EPERM})


# -- Queries --


def exists(path: Path) -> bool:
    """True if something lives at path. Broken symlinks count as present."""
    try:
        os.lstat(path)
        return True
    except OSError:
        return False


def is_directory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def read_symlink_target(path: Path) -> str | None:
    """Raw link target as stored on disk, or None if path is not a readable link."""
    try:
        return os.readlink(path)
    except OSError:
        return None


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


# -- Mutations --


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def remove_tree(path: Path) -> None:
    """Delete path recursively. Symlinks are unlinked, never followed."""
    if not exists(path):
        return
    if is_symlink(path) or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)
    logger.debug("Removed %s", path)


def copy_file(src: Path, dest: Path) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)


def _is_special(mode: int) -> bool:
    return (
        stat.S_ISSOCK(mode)
        or stat.S_ISFIFO(mode)
        or stat.S_ISCHR(mode)
        or stat.S_ISBLK(mode)
    )


def copy_tree(src: Path, dest: Path) -> list[str]:
    """Recursively copy src into dest.

    Entries named in SKIP_NAMES are omitted. Symlinks are recreated with
    the same target instead of being followed; broken ones are dropped.
    Sockets, FIFOs and device files are skipped. A file that vanishes or
    cannot be read is recorded and skipped; any other OSError aborts.

    Returns a list of "path: reason" strings for the skipped files.
    """
    errors: list[str] = []
    _copy_tree(src, dest, errors)
    return errors


def _copy_tree(src: Path, dest: Path, errors: list[str]) -> None:
    ensure_dir(dest)
    try:
        entries = sorted(src.iterdir())
    except PermissionError as e:
        logger.warning("Skipped %s: %s", src, e.strerror)
        errors.append(f"{src}: {e.strerror}")
        return

    for entry in entries:
        if entry.name in SKIP_NAMES:
            continue
        target = dest / entry.name

        if entry.is_symlink():
            link_target = read_symlink_target(entry)
            if link_target is None or not entry.exists():
                continue
            if exists(target):
                remove_tree(target)
            os.symlink(link_target, target)
            continue

        try:
            mode = entry.lstat().st_mode
        except FileNotFoundError:
            continue

        if stat.S_ISDIR(mode):
            _copy_tree(entry, target, errors)
        elif _is_special(mode):
            continue
        else:
            try:
                shutil.copy2(entry, target)
            except OSError as e:
                if e.errno not in _BENIGN_ERRNOS:
                    raise
                logger.warning("Skipped %s: %s", entry, e.strerror)
                errors.append(f"{entry}: {e.strerror}")


def materialize_tree(src: Path, dest: Path) -> None:
    """Copy src over dest as real files, replacing links that are in the way.

    Symlinks inside src are followed so the result holds content rather
    than links. At each level a symlink or a file blocking a needed
    directory is removed first, as is a directory blocking a needed file.
    """
    if is_symlink(dest) or (exists(dest) and not is_directory(dest)):
        dest.unlink()
    ensure_dir(dest)
    for entry in sorted(src.iterdir()):
        if entry.name in SKIP_NAMES:
            continue
        target = dest / entry.name
        if not entry.exists():
            continue
        if entry.is_dir():
            materialize_tree(entry, target)
            continue
        if is_symlink(target):
            target.unlink()
        elif is_directory(target):
            shutil.rmtree(target)
        copy_file(entry, target)


def backup_and_clear(path: Path) -> Path | None:
    """Move path out of the way before it is overwritten.

    Returns the backup location, or None when nothing was preserved
    (path absent, or path is a symlink which is simply unlinked).
    A previous backup for the same path is replaced.
    """
    if not exists(path):
        return None
    if is_symlink(path):
        path.unlink()
        logger.debug("Unlinked %s", path)
        return None

    backup = backup_path_for(path)
    if exists(backup):
        remove_tree(backup)
    path.rename(backup)
    logger.debug("Backed up %s -> %s", path, backup)
    return backup


def create_or_replace_symlink(target: Path | str, link_path: Path) -> None:
    """Point link_path at target, removing whatever file or link is there."""
    link_path.parent.mkdir(parents=True, exist_ok=True)
    if is_symlink(link_path) or (exists(link_path) and not is_directory(link_path)):
        link_path.unlink()
    os.symlink(str(target), link_path)
    logger.debug("Linked %s -> %s", link_path, target)


def create_symlink_with_backup(target: Path | str, link_path: Path) -> Path | None:
    backup = backup_and_clear(link_path)
    create_or_replace_symlink(target, link_path)
    return backup


def points_to(link_path: Path, target: Path | str) -> bool:
    """True if link_path is a symlink whose raw target equals target."""
    if not is_symlink(link_path):
        return False
    return read_symlink_target(link_path) == str(target)
