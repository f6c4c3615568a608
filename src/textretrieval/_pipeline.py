"""End-to-end index and match commands."""

from __future__ import annotations

import logging
from pathlib import Path

from ._analyzer import Analyzer
from ._blocks import BlockBuilder
from ._bm25 import OkapiBM25
from ._config import IndexConfig, MatchConfig
from ._index import GlobalIndex
from ._lengths import collect_lengths
from ._merger import merge_blocks
from ._runs import RunWriter
from ._source import TextDirectorySource
from ._storage import BlockStore

logger = logging.getLogger(__name__)


def index_collection(config: IndexConfig) -> Path:
    """Build blocks from ``config.source`` and merge them into one index file."""
    logger.info("Started indexing ...")
    source = TextDirectorySource(config.source, encoding=config.encoding)
    analyzer = Analyzer(stemming=config.stemming)
    builder = BlockBuilder(
        analyzer, config.block_size, lower=config.lower, upper=config.upper,
    )
    store = BlockStore(config.blocks_dir)
    store.clear()

    n_docs = 0
    n_blocks = 0
    for block in builder.build(source):
        store.write(block)
        n_docs += block.doc_count
        n_blocks += 1
    logger.info("Done creating %d blocks for %d documents", n_blocks, n_docs)

    index = merge_blocks(store)
    path = index.save(config.index_path)
    logger.info("Done indexing")
    return path


def match_topics(config: MatchConfig) -> list[Path]:
    """Score every configured topic against the index and write run files."""
    logger.info("Started Okapi BM25 retrieval ...")
    index = GlobalIndex.load(config.index_file)
    source = TextDirectorySource(config.source, encoding=config.encoding)
    lengths = collect_lengths(source, Analyzer())

    engine = OkapiBM25(index, lengths)
    writer = RunWriter(config.target, config.size)
    written = [
        writer.write(topic_number, ranks)
        for topic_number, _, ranks in engine.find_similar_batch(config.topics)
    ]
    logger.info("Done Okapi BM25 retrieval: %d of %d topics", len(written), len(config.topics))
    return written
