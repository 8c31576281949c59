"""Glob matching of publishable files."""

import glob
from pathlib import Path, PurePath

from .exceptions import PathError

MATCH_ALL = "."


def match_files(base: str | Path, pattern: str, dotfiles: bool = False) -> list[str]:
    """
    Find files under ``base`` matching a glob pattern.

    ``**`` matches any number of directories. Names starting with a dot are
    skipped unless ``dotfiles`` is set. The pattern ``"."`` matches every file.

    Args:
        base: Directory the pattern is relative to
        pattern: Glob pattern
        dotfiles: Whether to include dot-files and dot-directories

    Returns:
        Sorted list of matching file paths, relative to ``base``, using
        forward slashes

    Raises:
        PathError: If ``base`` is not a directory
    """
    base_path = Path(base)
    if not base_path.is_dir():
        raise PathError(f"Not a directory: {base_path}", path=str(base_path))

    if not pattern:
        return []
    if pattern == MATCH_ALL:
        pattern = "**/*"

    matches = glob.glob(
        pattern, root_dir=base_path, recursive=True, include_hidden=dotfiles
    )

    files = set()
    for match in matches:
        if not (base_path / match).is_file():
            continue
        files.add(PurePath(match).as_posix())

    return sorted(files)
