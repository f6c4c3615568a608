"""Global term-by-document index."""

from __future__ import annotations

import bisect
import logging
from pathlib import Path

from ._errors import IndexIOError
from ._storage import load_table, save_table
from ._types import RESERVED_ATTRIBUTES, DocumentRow

logger = logging.getLogger(__name__)

INDEX_RELATION = "index"


class GlobalIndex:
    """Sorted term schema plus one sparse count row per document.

    Attribute positions 0 and 1 are the reserved name and class columns;
    term columns follow in strictly ascending lexicographic order. Rows
    keep the order in which they were added.
    """

    __slots__ = ("_terms", "_term_set", "_rows", "_positions", "_df")

    def __init__(
        self,
        terms: list[str] | None = None,
        rows: list[DocumentRow] | None = None,
    ) -> None:
        self._terms: list[str] = []
        self._term_set: set[str] = set()
        self._rows: list[DocumentRow] = []
        self._positions: dict[str, int] = {}
        self._df: dict[str, int] = {}
        for term in terms or ():
            self.insert_term(term)
        for row in rows or ():
            self.add_row(row)

    # -- Schema --

    @property
    def terms(self) -> list[str]:
        return list(self._terms)

    @property
    def attributes(self) -> list[str]:
        return [*RESERVED_ATTRIBUTES, *self._terms]

    def __contains__(self, term: object) -> bool:
        return term in self._term_set

    def insert_term(self, term: str) -> int:
        """Insert ``term`` at its sorted position and return its attribute index.

        The index is the number of existing terms ordered before ``term``
        plus two for the reserved attributes. Existing terms are left alone.
        """
        position = bisect.bisect_left(self._terms, term)
        if term not in self._term_set:
            if term in RESERVED_ATTRIBUTES:
                raise ValueError(f"{term!r} is a reserved attribute")
            self._terms.insert(position, term)
            self._term_set.add(term)
            self._df.clear()
        return position + 2

    # -- Rows --

    @property
    def rows(self) -> list[DocumentRow]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def add_row(self, row: DocumentRow) -> None:
        if row.doc_id in self._positions:
            raise ValueError(f"duplicate document {row.doc_id!r}")
        unknown = [t for t in row.counts if t not in self._term_set]
        if unknown:
            raise ValueError(f"row {row.doc_id!r} has unknown terms: {unknown[:5]}")
        self._positions[row.doc_id] = len(self._rows)
        self._rows.append(row)
        self._df.clear()

    def find(self, doc_id: str) -> int | None:
        """Position of the row whose name attribute equals ``doc_id``."""
        return self._positions.get(doc_id)

    def value(self, row: int, term: str) -> int:
        return self._rows[row].value(term)

    def document_frequency(self, term: str) -> int:
        """Number of rows with a positive count for ``term``."""
        df = self._df.get(term)
        if df is None:
            df = sum(1 for row in self._rows if row.value(term) > 0)
            self._df[term] = df
        return df

    # -- Persistence --

    def save(self, path: Path | str) -> Path:
        path = Path(path)
        save_table(path, INDEX_RELATION, self._terms, self._rows, error_cls=IndexIOError)
        logger.info("Wrote index to %s", path)
        return path

    @classmethod
    def load(cls, path: Path | str) -> GlobalIndex:
        path = Path(path)
        _, terms, rows = load_table(path, error_cls=IndexIOError)
        if any(a >= b for a, b in zip(terms, terms[1:])):
            raise IndexIOError(f"Terms are not strictly sorted in {path}")
        try:
            index = cls(terms, rows)
        except ValueError as exc:
            raise IndexIOError(f"Inconsistent index {path}: {exc}") from exc
        logger.info("Loaded index %s: %d docs, %d terms", path, len(rows), len(terms))
        return index
