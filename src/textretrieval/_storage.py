"""Gzip-compressed msgpack tables for blocks and the global index."""

from __future__ import annotations

import gzip
import logging
import re
from pathlib import Path
from typing import Any

import msgpack

from ._errors import BlockIOError, TextRetrievalError
from ._types import RESERVED_ATTRIBUTES, Block, DocumentRow

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"
EXTENSION = ".msgpack.gz"
BLOCK_PREFIX = "block"

_BLOCK_NAME_RE = re.compile(rf"^{BLOCK_PREFIX}(\d+){re.escape(EXTENSION)}$")


def _encode_rows(
    terms: list[str], rows: list[DocumentRow]
) -> list[list[Any]]:
    column = {term: i for i, term in enumerate(terms, start=2)}
    encoded: list[list[Any]] = []
    for row in rows:
        cells = sorted(
            (column[term], count) for term, count in row.counts.items() if count
        )
        encoded.append([row.doc_id, row.class_name, [list(c) for c in cells]])
    return encoded


def _decode_rows(
    attributes: list[str], raw_rows: list[Any], path: Path,
    error_cls: type[TextRetrievalError],
) -> list[DocumentRow]:
    n_attrs = len(attributes)
    rows: list[DocumentRow] = []
    for raw in raw_rows:
        doc_id, class_name, cells = raw
        counts: dict[str, int] = {}
        for col, count in cells:
            if not 2 <= col < n_attrs:
                raise error_cls(f"Column {col} out of range in {path}")
            counts[attributes[col]] = int(count)
        rows.append(DocumentRow(doc_id=doc_id, class_name=class_name, counts=counts))
    return rows


def save_table(
    path: Path,
    relation: str,
    terms: list[str],
    rows: list[DocumentRow],
    *,
    error_cls: type[TextRetrievalError],
) -> Path:
    """Write a table atomically via a sibling ``.tmp`` file."""
    payload = {
        "version": FORMAT_VERSION,
        "relation": relation,
        "attributes": [*RESERVED_ATTRIBUTES, *terms],
        "rows": _encode_rows(terms, rows),
    }
    # mtime=0 keeps output byte-identical across runs
    data = gzip.compress(msgpack.packb(payload, use_bin_type=True), mtime=0)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(data)
        tmp_path.replace(path)
    except OSError as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        raise error_cls(f"Cannot write {path}: {exc}") from exc
    return path


def load_table(
    path: Path, *, error_cls: type[TextRetrievalError],
) -> tuple[str, list[str], list[DocumentRow]]:
    """Read a table, returning (relation, terms, rows)."""
    try:
        with open(path, "rb") as f:
            payload = msgpack.unpackb(gzip.decompress(f.read()), raw=False)
    except (OSError, EOFError, ValueError, msgpack.UnpackException) as exc:
        raise error_cls(f"Cannot read {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise error_cls(f"Malformed table in {path}")
    version = payload.get("version")
    if version != FORMAT_VERSION:
        raise error_cls(
            f"Expected table version {FORMAT_VERSION!r}, got {version!r} in {path}"
        )
    attributes = payload.get("attributes")
    if not isinstance(attributes, list) or tuple(attributes[:2]) != RESERVED_ATTRIBUTES:
        raise error_cls(f"Reserved attributes missing in {path}")
    if not all(isinstance(a, str) for a in attributes):
        raise error_cls(f"Malformed attributes in {path}")
    try:
        rows = _decode_rows(attributes, payload.get("rows", []), path, error_cls)
    except (TypeError, ValueError) as exc:
        raise error_cls(f"Malformed rows in {path}: {exc}") from exc
    return payload.get("relation", ""), attributes[2:], rows


def block_id_of(path: Path) -> int | None:
    m = _BLOCK_NAME_RE.match(path.name)
    return int(m.group(1)) if m else None


class BlockStore:
    """Directory holding the block files of one indexing run."""

    __slots__ = ("_directory",)

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, block_id: int) -> Path:
        return self._directory / f"{BLOCK_PREFIX}{block_id}{EXTENSION}"

    def paths(self) -> list[Path]:
        """Block files in ascending block-id order."""
        if not self._directory.is_dir():
            return []
        try:
            candidates = [
                p for p in self._directory.iterdir()
                if p.name.startswith(BLOCK_PREFIX) and p.name.endswith(EXTENSION)
            ]
        except OSError as exc:
            raise BlockIOError(f"Cannot list {self._directory}: {exc}") from exc

        def sort_key(p: Path) -> tuple[int, int, str]:
            block_id = block_id_of(p)
            if block_id is None:
                return (1, 0, p.name)
            return (0, block_id, p.name)

        return sorted(candidates, key=sort_key)

    def clear(self) -> int:
        """Remove block files left over from an earlier run."""
        removed = 0
        for path in self.paths():
            try:
                path.unlink()
            except OSError as exc:
                raise BlockIOError(f"Cannot remove stale block {path}: {exc}") from exc
            removed += 1
        if removed:
            logger.info("Removed %d stale blocks from %s", removed, self._directory)
        return removed

    def write(self, block: Block) -> Path:
        path = self.path_for(block.block_id)
        save_table(path, block.relation, block.terms, block.rows, error_cls=BlockIOError)
        logger.info("Wrote block to %s", path)
        return path

    def read(self, path: Path) -> Block:
        relation, terms, rows = load_table(path, error_cls=BlockIOError)
        block_id = block_id_of(path)
        if block_id is None:
            block_id = -1
        logger.debug("Read %s (%s): %d docs, %d terms", path, relation, len(rows), len(terms))
        return Block(block_id=block_id, terms=terms, rows=rows)
