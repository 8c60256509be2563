"""Directory and file operations that create, copy, move and prune files."""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import stat
from contextlib import suppress
from pathlib import Path
from typing import Callable, List, Optional, Union

__all__ = [
    "FileOperationError",
    "remove_dir",
    "copy_dir",
    "move_file_recursive",
    "copy_file_recursive",
    "remove_old_files",
    "delete_quiet",
]

_log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class FileOperationError(OSError):
    """A file or directory operation could not be carried out."""


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _make_writable(path: Path) -> None:
    if path.is_symlink():
        return
    with suppress(OSError):
        mode = stat.S_IMODE(os.stat(path).st_mode)
        os.chmod(path, mode | stat.S_IWRITE)


def remove_dir(path: PathLike) -> None:
    """Remove a directory with everything in it.

    Read-only files are made writable first. Symbolic links are removed, not
    followed. Raises :class:`FileOperationError` if the directory does not
    exist or something in it cannot be removed.
    """
    root = Path(path)
    if not _is_real_dir(root):
        raise FileOperationError(f'"{os.fspath(path)}" doesn\'t exist (remove)')

    # directories first, as the listing would give them
    entries = sorted(root.iterdir(), key=lambda entry: not _is_real_dir(entry))
    for entry in entries:
        if _is_real_dir(entry):
            remove_dir(entry)
            continue
        _make_writable(entry)
        try:
            entry.unlink()
        except OSError as err:
            raise FileOperationError(
                f'removal of "{entry.absolute()}" failed: {err.strerror or err}'
            ) from err

    try:
        root.rmdir()
    except OSError as err:
        raise FileOperationError(f'removal of "{root.absolute()}" failed') from err


def copy_dir(source: PathLike, destination: PathLike, merge: bool = False) -> bool:
    """Copy a directory tree.

    Returns False if ``source`` is not a directory, or if ``destination``
    exists and ``merge`` is false. Files already present in the destination
    are left alone, and files that fail to copy are skipped, so True does not
    promise that every file was copied. Symbolic links to directories are not
    followed, to avoid endless recursion.
    """
    src = Path(source)
    dst = Path(destination)
    if not src.is_dir():
        return False
    if not dst.is_dir():
        with suppress(OSError):
            dst.mkdir()
    elif not merge:
        return False

    entries = list(src.iterdir())
    for entry in entries:
        if not entry.is_file():
            continue
        target = dst / entry.name
        if target.exists():
            continue
        with suppress(OSError):
            shutil.copy2(entry, target)

    for entry in entries:
        if _is_real_dir(entry):
            copy_dir(entry, dst / entry.name, merge)
    return True


def _ensure_parents(base_dir: str, destination: str) -> str:
    path = base_dir
    for component in destination.split("/")[:-1]:
        path = f"{path}/{component}"
        if os.path.isdir(path):
            continue
        try:
            os.mkdir(path)
        except OSError as err:
            raise FileOperationError(f'failed to create directory "{path}"') from err
    return f"{base_dir}/{destination}"


def move_file_recursive(
    source: PathLike, base_dir: PathLike, destination: PathLike
) -> None:
    """Move ``source`` to ``base_dir/destination``, creating directories.

    ``destination`` is relative to ``base_dir`` and uses ``/`` as separator.
    When renaming fails the file is copied and the original removed. An
    existing target is never overwritten; that and other failures raise
    :class:`FileOperationError`.
    """
    src = os.fspath(source)
    target = _ensure_parents(os.fspath(base_dir), os.fspath(destination))
    if os.path.lexists(target):
        raise FileOperationError(f'failed to copy "{src}" to "{target}"')
    try:
        os.rename(src, target)
    except OSError:
        try:
            shutil.copy2(src, target)
        except OSError as err:
            raise FileOperationError(f'failed to copy "{src}" to "{target}"') from err
        with suppress(OSError):
            os.remove(src)


def copy_file_recursive(
    source: PathLike, base_dir: PathLike, destination: PathLike
) -> None:
    """Copy ``source`` to ``base_dir/destination``, creating directories.

    An existing target is never overwritten; that and other failures raise
    :class:`FileOperationError`.
    """
    src = os.fspath(source)
    target = _ensure_parents(os.fspath(base_dir), os.fspath(destination))
    if os.path.lexists(target):
        raise FileOperationError(f'failed to copy "{src}" to "{target}"')
    try:
        shutil.copy2(src, target)
    except OSError as err:
        raise FileOperationError(f'failed to copy "{src}" to "{target}"') from err


def _newest_first(path: Path) -> float:
    return -path.stat().st_mtime


def remove_old_files(
    path: PathLike,
    pattern: str,
    num_to_keep: int,
    sort_key: Optional[Callable[[Path], object]] = None,
) -> List[Path]:
    """Delete files matching ``pattern`` so that ``num_to_keep`` remain.

    Matching files are sorted by ``sort_key`` (by default newest first, by
    modification time) and the last ``num_to_keep`` of them are kept. Files
    that cannot be deleted are logged and left. Returns the deleted paths.
    """
    directory = Path(path)
    if not directory.is_dir():
        return []
    files = [
        entry
        for entry in directory.iterdir()
        if entry.is_file() and fnmatch.fnmatch(entry.name, pattern)
    ]
    excess = len(files) - num_to_keep
    if excess <= 0:
        return []

    files.sort(key=sort_key or _newest_first)
    removed = []
    for entry in files[:excess]:
        try:
            delete_quiet(entry)
        except FileOperationError as err:
            _log.warning("failed to remove log files: %s", err)
        else:
            removed.append(entry.absolute())
    return removed


def delete_quiet(path: PathLike) -> None:
    """Delete a file, clearing a read-only flag if that is what prevents it.

    Raises :class:`FileOperationError` if the file is missing or stays.
    """
    target = Path(path)
    try:
        target.unlink()
        return
    except FileNotFoundError as err:
        raise FileOperationError(f'"{target}" doesn\'t exist (remove)') from err
    except OSError:
        pass

    _make_writable(target)
    try:
        target.unlink()
    except OSError as err:
        raise FileOperationError(
            f'removal of "{target.absolute()}" failed: {err.strerror or err}'
        ) from err