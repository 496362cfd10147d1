"""
Find the immediate subdirectories of a root that contain a given file.

Each qualifying subdirectory becomes one column of the combined table, named
after the subdirectory and ordered by name.
"""
from pathlib import Path

from combine_errors import ConfigError


def scan_subdirs(root: Path, filename: str) -> tuple[list[str], list[Path]]:
    """
    List subdirectories of root holding a regular file called filename.

    Args:
        root: Directory whose immediate children are scanned
        filename: Exact name of the file to look for in each child

    Returns:
        (column names, directory paths), both sorted by subdirectory name and
        positionally aligned

    Raises:
        ConfigError: If root is not a directory or no child has the file
    """
    root = Path(root)
    if not root.is_dir():
        raise ConfigError(f"The specified directory does not exist or is not a directory: {root}")

    found = [
        entry for entry in root.iterdir()
        if entry.is_dir() and (entry / filename).is_file()
    ]
    if not found:
        raise ConfigError(f"No subdirectories found containing the file '{filename}'")

    # Same parent for every entry, so name order is path order
    found.sort(key=lambda p: p.name)
    return [p.name for p in found], found
