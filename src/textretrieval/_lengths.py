"""Per-document token counts and collection average length."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ._analyzer import Analyzer
from ._errors import InputError
from ._types import Document, DocumentLengths

logger = logging.getLogger(__name__)


def collect_lengths(
    documents: Iterable[Document], analyzer: Analyzer,
) -> DocumentLengths:
    """Count analyzer tokens per document and compute avgdl."""
    logger.info("Started computing document lengths ...")
    lengths: dict[str, int] = {}
    for doc in documents:
        lengths[doc.doc_id] = analyzer.count(doc.text)

    if not lengths:
        raise InputError("Cannot compute document lengths of an empty collection")

    avgdl = float(sum(lengths.values())) / float(len(lengths))
    logger.info("Computed average document length of the collection as %s", avgdl)
    return DocumentLengths(lengths=lengths, avgdl=avgdl)
