"""Expansion of command line paths into Go files to check.

Ignore patterns are shell-style globs matched against normalized relative
paths, one path segment at a time: ``*`` and ``?`` stay within a segment and
``**`` matches zero or more directories. A directory matching a pattern is
not descended into.
"""

import fnmatch
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .checkstyle_logging import get_logger

logger = get_logger("walker")

GO_SUFFIX = ".go"
GLOBSTAR = "**"


def _split(path: str) -> list[str]:
    return os.path.normpath(path).replace(os.sep, "/").split("/")


def glob_match(path: str | Path, pattern: str) -> bool:
    """Match ``path`` against a glob pattern with ``**`` support.

    Examples:
        ``src/*.go`` matches ``src/a.go`` but not ``src/sub/a.go``.
        ``src/**/*.go`` matches both.
    """
    path_parts = _split(str(path))
    pattern_parts = _split(pattern)

    def match_from(p_idx: int, path_idx: int) -> bool:
        if p_idx == len(pattern_parts):
            return path_idx == len(path_parts)

        part = pattern_parts[p_idx]
        if part == GLOBSTAR:
            if p_idx == len(pattern_parts) - 1:
                return True
            return any(
                match_from(p_idx + 1, i) for i in range(path_idx, len(path_parts) + 1)
            )

        if path_idx == len(path_parts):
            return False
        if fnmatch.fnmatchcase(path_parts[path_idx], part):
            return match_from(p_idx + 1, path_idx + 1)
        return False

    return match_from(0, 0)


class FileWalker:
    """Yields the Go files under a set of paths, minus ignored ones."""

    def __init__(self, ignore_patterns: Iterable[str] = ()):
        self.ignore_patterns = list(ignore_patterns)

    def is_ignored(self, path: str | Path) -> bool:
        """Whether ``path`` matches any ignore pattern."""
        return any(glob_match(path, pattern) for pattern in self.ignore_patterns)

    def iter_files(self, paths: Iterable[str | Path]) -> Iterator[str]:
        """Expand paths into files to check, in a stable order.

        Directories are walked recursively and only ``*.go`` files are kept.
        Files given explicitly are yielded even without the suffix, unless
        ignored.
        """
        for path in paths:
            path = str(path)
            if os.path.isdir(path):
                yield from self._walk(path)
            elif self.is_ignored(path):
                logger.debug(f"Ignoring {path}")
            else:
                yield path

    def _walk(self, root: str) -> Iterator[str]:
        if self.is_ignored(root):
            logger.debug(f"Ignoring directory {root}")
            return

        for dirpath, dirnames, filenames in os.walk(root):
            kept = []
            for dirname in sorted(dirnames):
                if self.is_ignored(os.path.join(dirpath, dirname)):
                    logger.debug(f"Ignoring directory {os.path.join(dirpath, dirname)}")
                else:
                    kept.append(dirname)
            dirnames[:] = kept

            for filename in sorted(filenames):
                if not filename.endswith(GO_SUFFIX):
                    continue
                file_path = os.path.normpath(os.path.join(dirpath, filename))
                if self.is_ignored(file_path):
                    logger.debug(f"Ignoring {file_path}")
                    continue
                yield file_path


__all__ = ["FileWalker", "glob_match"]
