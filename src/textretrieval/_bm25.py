"""Okapi BM25 find-similar-documents engine."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator

from ._errors import QueryNotFound
from ._index import GlobalIndex
from ._types import DocumentLengths, DocumentRow, Rank

logger = logging.getLogger(__name__)

K1 = 1.2
B = 0.75
TOP_K = 10


class OkapiBM25:
    """Rank indexed documents by BM25 similarity to an indexed query document.

    The query document's own term counts define the active vocabulary:
    only terms it contains contribute to a candidate's score. Scores are
    not textbook BM25:

    - length normalisation is ``1 - b + b * |q| * avgdl`` where ``|q|`` is
      the query document's length (not the candidate's, and multiplied by
      rather than divided by avgdl);
    - document frequency ``n_t`` starts at 1 and then counts every row with
      the term, the query included;
    - IDF is ``ln((N - n_t + 0.5) / (n_t + 0.5))`` and may be negative.

    IDFs are memoised per query. The best ``top_k`` candidates are kept in
    an ascending buffer whose first slot is the current minimum; a
    candidate enters only with a score strictly above that minimum, so
    slots never filled by a positive score are returned as
    ``Rank(0.0, None)``.
    """

    __slots__ = ("_index", "_lengths", "_k1", "_b", "_top_k", "_idfs")

    def __init__(
        self,
        index: GlobalIndex,
        lengths: DocumentLengths,
        *,
        k1: float = K1,
        b: float = B,
        top_k: int = TOP_K,
    ) -> None:
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        self._index = index
        self._lengths = lengths
        self._k1 = k1
        self._b = b
        self._top_k = top_k
        self._idfs: dict[str, float] = {}

    # -- Public API --

    def find_similar(self, doc_id: str) -> list[Rank]:
        """Return exactly ``top_k`` ranks for ``doc_id``, best first.

        Raises:
            QueryNotFound: If ``doc_id`` is not in the index or has no
                recorded length.
        """
        index = self._index
        query_pos = index.find(doc_id)
        if query_pos is None:
            raise QueryNotFound(
                f"Requested query document with documentID of {doc_id} could not be found"
            )
        query_len = self._lengths.lengths.get(doc_id)
        if query_len is None:
            raise QueryNotFound(f"No document length recorded for {doc_id}")

        query = index.rows[query_pos]
        # Sorted keys follow the index column order.
        query_terms = sorted(t for t, c in query.counts.items() if c > 0)

        self._idfs = {}
        top = [Rank(0.0, None) for _ in range(self._top_k)]
        for pos, row in enumerate(index.rows):
            if pos == query_pos:
                continue
            score = self.score(query_terms, query_len, row)
            if top[0].score < score:
                top[0] = Rank(score, row.doc_id)
                top.sort()

        filled = sum(1 for rank in top if rank.doc_id is not None)
        logger.info("Found %d most similar documents for %s", filled, doc_id)
        return top[::-1]

    def find_similar_batch(
        self, doc_ids: Iterable[str]
    ) -> Iterator[tuple[int, str, list[Rank]]]:
        """Yield ``(topic_number, doc_id, ranks)``; missing queries are skipped."""
        for topic_number, doc_id in enumerate(doc_ids, start=1):
            try:
                ranks = self.find_similar(doc_id)
            except QueryNotFound as exc:
                logger.warning("%s", exc)
                continue
            yield topic_number, doc_id, ranks

    def score(
        self, query_terms: list[str], query_len: int, row: DocumentRow,
    ) -> float:
        k1 = self._k1
        b = self._b
        avgdl = self._lengths.avgdl
        score = 0.0
        for term in query_terms:
            tf = row.value(term)
            idf = self.idf(term)
            score += idf * tf * (k1 + 1) / (tf + k1 * (1 - b + b * query_len * avgdl))
        return score

    def idf(self, term: str) -> float:
        idf = self._idfs.get(term)
        if idf is None:
            n = len(self._index)
            containing = 1 + self._index.document_frequency(term)
            ratio = (n - containing + 0.5) / (containing + 0.5)
            # A term in every row has no defined IDF; NaN never outranks a slot.
            idf = math.log(ratio) if ratio > 0 else math.nan
            self._idfs[term] = idf
        return idf
