"""Blocked sort-based indexing: per-block dictionaries and flushing."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ._analyzer import Analyzer
from ._types import Block, Document, DocumentRow

logger = logging.getLogger(__name__)


def apply_thresholds(
    dictionary: dict[str, list[int]], lower: int = -1, upper: int = -1,
) -> list[str]:
    """Drop out-of-range counts in place and return the removed terms.

    Only cells with a positive count are considered. A cell is dropped when
    it is below ``lower`` or, if ``upper`` is non-negative, above ``upper``.
    Terms left without any cell are removed from the dictionary. A negative
    bound is disabled.
    """
    if lower < 0 and upper < 0:
        return []

    removed: list[str] = []
    for term, postings in dictionary.items():
        keep = False
        for i, count in enumerate(postings):
            if count <= 0:
                continue
            if count < lower or (upper > -1 and count > upper):
                postings[i] = 0
            else:
                keep = True
        if not keep:
            removed.append(term)
    for term in removed:
        del dictionary[term]
    return removed


class BlockBuilder:
    """Partition a document stream into blocks of ``block_size`` documents.

    Each block carries its own sorted term schema and one count row per
    document; terms that do not occur in a block are absent from it.
    """

    __slots__ = ("_analyzer", "_block_size", "_lower", "_upper")

    def __init__(
        self,
        analyzer: Analyzer,
        block_size: int = 100,
        *,
        lower: int = -1,
        upper: int = -1,
    ) -> None:
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size}")
        self._analyzer = analyzer
        self._block_size = block_size
        self._lower = lower
        self._upper = upper

    @property
    def block_size(self) -> int:
        return self._block_size

    def build(self, documents: Iterable[Document]) -> Iterator[Block]:
        """Yield blocks in corpus order, the last one possibly short."""
        dictionary: dict[str, list[int]] = {}
        members: list[tuple[str, str]] = []
        block_id = 0

        for doc in documents:
            i = len(members)
            for token in self._analyzer.tokenize(doc.text):
                postings = dictionary.get(token)
                if postings is None:
                    postings = [0] * self._block_size
                    dictionary[token] = postings
                postings[i] += 1
            members.append((doc.doc_id, doc.class_name))

            if len(members) == self._block_size:
                yield self._flush(block_id, dictionary, members)
                block_id += 1
                dictionary.clear()
                members = []

        if members:
            yield self._flush(block_id, dictionary, members)

    def _flush(
        self,
        block_id: int,
        dictionary: dict[str, list[int]],
        members: list[tuple[str, str]],
    ) -> Block:
        removed = apply_thresholds(dictionary, self._lower, self._upper)
        if removed:
            logger.debug("Block %d: thresholding removed %d terms", block_id, len(removed))

        terms = sorted(dictionary)
        rows: list[DocumentRow] = []
        for i, (doc_id, class_name) in enumerate(members):
            counts = {}
            for term in terms:
                count = dictionary[term][i]
                if count:
                    counts[term] = count
            rows.append(DocumentRow(doc_id=doc_id, class_name=class_name, counts=counts))

        logger.info("Creating block %d: %d docs, %d terms", block_id, len(rows), len(terms))
        return Block(block_id=block_id, terms=terms, rows=rows)
