"""Textretrieval: blocked sort-based indexing and Okapi BM25 find-similar retrieval."""

from __future__ import annotations

from ._analyzer import DEFAULT_DELIMITERS, Analyzer
from ._blocks import BlockBuilder, apply_thresholds
from ._bm25 import OkapiBM25
from ._config import DEFAULT_TOPICS, IndexConfig, MatchConfig, load_topics
from ._errors import (
    BlockIOError,
    IndexIOError,
    InputError,
    OutputIOError,
    QueryNotFound,
    TextRetrievalError,
    UsageError,
)
from ._index import GlobalIndex
from ._lengths import collect_lengths
from ._merger import BlockMerger, merge_blocks
from ._pipeline import index_collection, match_topics
from ._runs import EMPTY_DOC_ID, PostingListSize, RunWriter, format_score
from ._source import TextDirectorySource
from ._storage import BlockStore
from ._types import (
    CLASS_ATTRIBUTE,
    NAME_ATTRIBUTE,
    Block,
    Document,
    DocumentLengths,
    DocumentRow,
    Rank,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Analyzer",
    "Block",
    "BlockBuilder",
    "BlockIOError",
    "BlockMerger",
    "BlockStore",
    "CLASS_ATTRIBUTE",
    "DEFAULT_DELIMITERS",
    "DEFAULT_TOPICS",
    "Document",
    "DocumentLengths",
    "DocumentRow",
    "EMPTY_DOC_ID",
    "GlobalIndex",
    "IndexConfig",
    "IndexIOError",
    "InputError",
    "MatchConfig",
    "NAME_ATTRIBUTE",
    "OkapiBM25",
    "OutputIOError",
    "PostingListSize",
    "QueryNotFound",
    "Rank",
    "RunWriter",
    "TextDirectorySource",
    "TextRetrievalError",
    "UsageError",
    "apply_thresholds",
    "collect_lengths",
    "format_score",
    "index_collection",
    "load_topics",
    "match_topics",
    "merge_blocks",
]
