"""Filesystem helpers for flatcms.

Key functions:
    ensure_clean_dir: Remove a directory tree and recreate it empty.
    iter_source_files: List the documents of a source directory in name order.
    artifact_name: Name of the HTML artifact for a source document.
"""

from __future__ import annotations

import shutil
from pathlib import Path

HTML_SUFFIX = ".html"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, it is removed with everything beneath it before
    being created again. Unlike a best-effort cleanup, any failure is raised.

    Args:
        path: Directory path to clean or create.

    Raises:
        OSError: If the directory cannot be removed or created.
    """
    if path.exists() or path.is_symlink():
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    path.mkdir(parents=True)


def iter_source_files(source_dir: Path) -> list[Path]:
    """List the source documents in a directory.

    Subdirectories are not documents and are left out. Files are returned in
    lexicographic order of their names so runs are reproducible across
    filesystems.

    Args:
        source_dir: Directory to list.

    Returns:
        Sorted list of file paths.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return sorted(
        (entry for entry in source_dir.iterdir() if entry.is_file()),
        key=lambda entry: entry.name,
    )


def artifact_name(source: Path) -> str:
    """Return the artifact file name for a source document.

    Examples:
        >>> artifact_name(Path("posts/hello-world.md"))
        'hello-world.html'

        >>> artifact_name(Path("notes"))
        'notes.html'
    """
    return Path(source.name).with_suffix(HTML_SUFFIX).name
