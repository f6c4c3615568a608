"""Data structures for textretrieval."""

from __future__ import annotations

from dataclasses import dataclass, field

NAME_ATTRIBUTE = "@nameOfTheDocument"
CLASS_ATTRIBUTE = "@classOfTheDocument"
RESERVED_ATTRIBUTES: tuple[str, str] = (NAME_ATTRIBUTE, CLASS_ATTRIBUTE)


@dataclass(slots=True, frozen=True)
class Document:
    doc_id: str
    class_name: str
    text: str


@dataclass(slots=True)
class DocumentRow:
    doc_id: str
    class_name: str
    counts: dict[str, int] = field(default_factory=dict)  # zero cells omitted

    def value(self, term: str) -> int:
        return self.counts.get(term, 0)


@dataclass(slots=True)
class Block:
    block_id: int
    terms: list[str]   # lexicographically sorted
    rows: list[DocumentRow]

    @property
    def doc_count(self) -> int:
        return len(self.rows)

    @property
    def relation(self) -> str:
        return f"block{self.block_id}"

    @property
    def attributes(self) -> list[str]:
        return [*RESERVED_ATTRIBUTES, *self.terms]


@dataclass(slots=True, frozen=True)
class DocumentLengths:
    lengths: dict[str, int]
    avgdl: float


@dataclass(slots=True, frozen=True, order=True)
class Rank:
    score: float
    doc_id: str | None = field(default=None, compare=False)
