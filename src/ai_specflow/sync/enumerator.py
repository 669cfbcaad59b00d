"""Recursive file enumeration for template trees.

``SourceTree`` yields the relative POSIX path of every regular file below
a root directory.  Descent uses an explicit stack of directory iterators,
so tree depth never touches the interpreter's recursion limit.  Entries
are visited in lexicographic order per directory, giving a deterministic
depth-first order (``a/b.txt`` before ``c.txt``).

Symlinked directories are followed.  A directory that is its own
ancestor (by device and inode) raises ``TraversalError``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from ai_specflow.errors import TraversalError

logger = logging.getLogger(__name__)

_DirKey = tuple[int, int]


def _dir_key(path: Path) -> _DirKey:
    st = path.stat()
    return (st.st_dev, st.st_ino)


def _sorted_entries(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


class SourceTree:
    """Restartable view of the regular files beneath *root*.

    Every call to ``iter()`` walks the disk again, so the sequence
    reflects the tree at iteration time.

    Args:
        root: Directory to enumerate.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def __iter__(self) -> Iterator[str]:
        return iter_files(self.root)

    def __repr__(self) -> str:
        return f"SourceTree({str(self.root)!r})"


def iter_files(root: Path) -> Iterator[str]:
    """Lazily yield relative paths for all regular files under *root*.

    Args:
        root: Directory to enumerate.

    Yields:
        Relative paths using ``/`` separators.

    Raises:
        TraversalError: If a symlink cycle is found.
        OSError: If a directory cannot be listed.
    """
    root = Path(root)
    root_key = _dir_key(root)

    # Each frame: (directory iterator, relative prefix, ancestor keys).
    stack: list[
        tuple[Iterator[os.DirEntry[str]], tuple[str, ...], frozenset[_DirKey]]
    ] = [(iter(_sorted_entries(root)), (), frozenset({root_key}))]

    while stack:
        entries, prefix, ancestors = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        parts = prefix + (entry.name,)

        if entry.is_dir():
            entry_path = Path(entry.path)
            key = _dir_key(entry_path)
            if key in ancestors:
                raise TraversalError(
                    f"Symlink cycle detected at {entry_path} "
                    f"(resolves to {entry_path.resolve()})"
                )
            stack.append(
                (iter(_sorted_entries(entry_path)), parts, ancestors | {key})
            )
        elif entry.is_file():
            yield "/".join(parts)
        else:
            logger.debug("Ignoring non-regular entry: %s", entry.path)
