"""Copy a set of files from a base directory into a destination tree."""

import logging
import os
import shutil
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .exceptions import FileSystemError

logger = logging.getLogger(__name__)


def unique_dirs(files: str | list[str]) -> list[str]:
    """
    Generate a list of unique directory paths given a list of file paths.

    Every ancestor of each file's directory is included, so ``a/b/c.txt``
    yields ``a`` and ``a/b``.

    Args:
        files: File path or list of file paths

    Returns:
        List of directory paths, in first-seen order
    """
    if isinstance(files, str):
        files = [files]

    dirs: dict[str, bool] = {}
    for filepath in files:
        parts = os.path.dirname(filepath).split(os.sep)
        partial = parts[0] or os.sep
        dirs[partial] = True
        for part in parts[1:]:
            partial = os.path.join(partial, part)
            dirs[partial] = True

    return list(dirs)


def _dir_sort_key(path: str) -> tuple[int, list[str]]:
    parts = path.split(os.sep)
    return len(parts), parts


def sort_dirs(dirs: list[str]) -> list[str]:
    """
    Sort directories so that parents always come before their children.

    Shallower paths sort first; paths of equal depth are compared segment by
    segment.
    """
    return sorted(dirs, key=_dir_sort_key)


def copy_files(
    files: str | list[str],
    base: str | Path,
    destination: str | Path,
    max_workers: int = 8,
) -> list[str]:
    """
    Copy files from ``base`` into ``destination``, preserving relative paths.

    Directories are created shallowest first. The files belonging to a
    directory are copied in parallel once that directory exists.

    Args:
        files: File path(s), relative to ``base``
        base: Source base directory
        destination: Destination base directory
        max_workers: Maximum number of concurrent copies

    Returns:
        List of destination file paths that were written

    Raises:
        FileSystemError: If any file cannot be copied
    """
    if isinstance(files, str):
        files = [files]

    base = os.path.abspath(base)
    destination = os.path.abspath(destination)

    pairs_by_dir: dict[str, list[tuple[str, str]]] = defaultdict(list)
    targets = []
    for file in files:
        src = os.path.join(base, file)
        relative = os.path.relpath(src, base)
        target = os.path.join(destination, relative)
        pairs_by_dir[os.path.dirname(target)].append((src, target))
        targets.append(target)

    written: list[str] = []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        for directory in sort_dirs(unique_dirs(targets)):
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise FileSystemError(
                    f"Failed to create directory {directory}: {e}",
                    path=directory,
                    operation="mkdir",
                ) from e

            pairs = pairs_by_dir.get(directory)
            if not pairs:
                continue

            futures = {
                pool.submit(shutil.copyfile, src, target): src for src, target in pairs
            }
            errors = []
            for future in as_completed(futures):
                try:
                    written.append(future.result())
                except OSError as e:
                    errors.append((futures[future], e))

            if errors:
                src, error = errors[0]
                raise FileSystemError(
                    f"Failed to copy {src}: {error}",
                    path=src,
                    operation="copy",
                    details={"failed": [path for path, _ in errors]},
                )

    logger.debug(f"Copied {len(written)} files into {destination}")
    return sorted(written)
