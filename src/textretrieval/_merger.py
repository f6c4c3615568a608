"""Fold block files into one global index."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ._errors import BlockIOError
from ._index import GlobalIndex
from ._storage import BlockStore
from ._types import Block, DocumentRow

logger = logging.getLogger(__name__)


class BlockMerger:
    """Merge blocks by column name into a growing global index."""

    __slots__ = ("_index",)

    def __init__(self) -> None:
        self._index = GlobalIndex()

    @property
    def index(self) -> GlobalIndex:
        return self._index

    def add_block(self, block: Block) -> None:
        index = self._index
        for term in block.terms:
            if term not in index:
                index.insert_term(term)

        for row in block.rows:
            counts = {t: c for t, c in row.counts.items() if c}
            try:
                index.add_row(DocumentRow(row.doc_id, row.class_name, counts))
            except ValueError as exc:
                raise BlockIOError(f"Cannot merge {block.relation}: {exc}") from exc

    def merge(self, blocks: Iterable[Block]) -> GlobalIndex:
        for block in blocks:
            self.add_block(block)
        return self._index


def merge_blocks(store: BlockStore) -> GlobalIndex:
    """Read every block in ``store`` in block-id order and merge them."""
    logger.info("Started merging blocks ...")
    merger = BlockMerger()
    for path in store.paths():
        logger.info("Adding %s to index ...", path.name)
        merger.add_block(store.read(path))
    index = merger.index
    logger.info("Done merging: %d docs, %d terms", len(index), len(index.terms))
    return index
