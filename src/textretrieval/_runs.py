"""TREC-style run files."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from enum import Enum
from pathlib import Path

from ._errors import OutputIOError
from ._types import Rank

logger = logging.getLogger(__name__)

GROUP = "groupG"
EMPTY_DOC_ID = "null"


def format_score(score: float) -> str:
    """Render a score like Java's ``Double.toString``.

    Magnitudes in [1e-3, 1e7) use plain decimal notation with at least one
    fractional digit; others use ``<d>.<ddd>E<exp>``. Digits are the
    shortest round-trip representation.
    """
    if math.isnan(score):
        return "NaN"
    if math.isinf(score):
        return "Infinity" if score > 0 else "-Infinity"
    sign = "-" if math.copysign(1.0, score) < 0 else ""
    if score == 0:
        return f"{sign}0.0"

    _, digit_tuple, exponent = Decimal(repr(abs(score))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent - 1   # decimal exponent of the first digit
    digits = digits.rstrip("0") or "0"

    if 1e-3 <= abs(score) < 1e7:
        if point >= 0:
            whole = digits[:point + 1].ljust(point + 1, "0")
            frac = digits[point + 1:] or "0"
        else:
            whole = "0"
            frac = "0" * (-point - 1) + digits
        return f"{sign}{whole}.{frac}"
    return f"{sign}{digits[0]}.{digits[1:] or '0'}E{point}"


class PostingListSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    def __str__(self) -> str:
        return self.value


class RunWriter:
    """Write one ``{size}_topic{n}_{group}.txt`` file per topic."""

    __slots__ = ("_target", "_size", "_group")

    def __init__(
        self,
        target: Path | str,
        size: PostingListSize = PostingListSize.MEDIUM,
        group: str = GROUP,
    ) -> None:
        self._target = Path(target)
        self._size = PostingListSize(size)
        self._group = group

    def path_for(self, topic_number: int) -> Path:
        return self._target / f"{self._size.value}_topic{topic_number}_{self._group}.txt"

    def format_line(self, topic_number: int, rank: int, entry: Rank) -> str:
        doc_id = entry.doc_id if entry.doc_id is not None else EMPTY_DOC_ID
        return (
            f"topic{topic_number} Q0 {doc_id} {rank} "
            f"{format_score(entry.score)} {self._group}_{self._size.value}\r\n"
        )

    def write(self, topic_number: int, ranks: list[Rank]) -> Path:
        path = self.path_for(topic_number)
        lines = [
            self.format_line(topic_number, i, entry)
            for i, entry in enumerate(ranks, start=1)
        ]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.writelines(lines)
        except OSError as exc:
            raise OutputIOError(f"Error saving results to file {path}: {exc}") from exc
        logger.info("Wrote results to %s", path)
        return path
