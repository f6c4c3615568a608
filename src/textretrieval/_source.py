"""Deterministic directory-of-classes text source."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from ._errors import InputError
from ._types import Document

logger = logging.getLogger(__name__)


class TextDirectorySource:
    """Iterate the documents of a ``<class>/<file>`` directory tree.

    Each immediate sub-directory names a class and each regular file in it
    is one document with ID ``"<class>/<file>"``. Classes and files are
    visited in sorted name order so that repeated passes agree.
    """

    __slots__ = ("_directory", "_encoding")

    def __init__(self, directory: Path | str, encoding: str = "utf-8") -> None:
        self._directory = Path(directory)
        self._encoding = encoding

    @property
    def directory(self) -> Path:
        return self._directory

    def __iter__(self) -> Iterator[Document]:
        for class_dir in self._class_dirs():
            for path in _sorted_entries(class_dir):
                if not path.is_file():
                    continue
                try:
                    text = path.read_text(encoding=self._encoding, errors="replace")
                except OSError as exc:
                    raise InputError(f"Cannot read {path}: {exc}") from exc
                yield Document(
                    doc_id=f"{class_dir.name}/{path.name}",
                    class_name=class_dir.name,
                    text=text,
                )

    def _class_dirs(self) -> list[Path]:
        if not self._directory.is_dir():
            raise InputError(f"Source directory not found: {self._directory}")
        dirs = [p for p in _sorted_entries(self._directory) if p.is_dir()]
        logger.debug("Found %d classes in %s", len(dirs), self._directory)
        return dirs


def _sorted_entries(directory: Path) -> list[Path]:
    try:
        entries = [p for p in directory.iterdir() if not p.name.startswith(".")]
    except OSError as exc:
        raise InputError(f"Cannot list {directory}: {exc}") from exc
    return sorted(entries, key=lambda p: p.name)
