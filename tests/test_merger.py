"""Tests for merging blocks into the global index."""

import pytest

from textretrieval import (
    Analyzer,
    Block,
    BlockBuilder,
    BlockIOError,
    BlockMerger,
    BlockStore,
    Document,
    DocumentRow,
    merge_blocks,
)


def test_schema_is_merged_in_sorted_order():
    merger = BlockMerger()
    merger.add_block(Block(0, ["ant", "cat"], [DocumentRow("d1", "k", {"ant": 1, "cat": 2})]))
    merger.add_block(Block(1, ["bat", "cat", "dog"], [DocumentRow("d2", "k", {"bat": 1, "dog": 3})]))
    index = merger.index
    assert index.attributes == [
        "@nameOfTheDocument", "@classOfTheDocument", "ant", "bat", "cat", "dog",
    ]


def test_cells_copied_by_name():
    merger = BlockMerger()
    merger.add_block(Block(0, ["ant", "cat"], [DocumentRow("d1", "k", {"ant": 1, "cat": 2})]))
    merger.add_block(Block(1, ["bat", "cat", "dog"], [DocumentRow("d2", "j", {"cat": 5, "dog": 3})]))
    index = merger.index
    assert len(index) == 2
    d1, d2 = index.find("d1"), index.find("d2")
    assert (d1, d2) == (0, 1)
    assert [index.value(d1, t) for t in index.terms] == [1, 0, 2, 0]
    assert [index.value(d2, t) for t in index.terms] == [0, 0, 5, 3]
    assert index.rows[d2].class_name == "j"


def test_schema_only_block_still_adds_rows():
    merger = BlockMerger()
    merger.add_block(Block(0, [], [DocumentRow("d1", "k"), DocumentRow("d2", "k")]))
    assert len(merger.index) == 2
    assert merger.index.terms == []


def test_duplicate_document_rejected():
    merger = BlockMerger()
    merger.add_block(Block(0, [], [DocumentRow("d1", "k")]))
    with pytest.raises(BlockIOError, match="duplicate"):
        merger.add_block(Block(1, [], [DocumentRow("d1", "k")]))


def test_merge_matches_single_block_build():
    docs = [
        Document("a", "k", "the cat sat"),
        Document("b", "k", "the cat ran"),
        Document("c", "k", "dogs bark"),
    ]
    blocked = BlockMerger().merge(BlockBuilder(Analyzer(), 2).build(docs))
    single = BlockMerger().merge(BlockBuilder(Analyzer(), 3).build(docs))
    assert blocked.terms == ["bark", "cat", "dogs", "ran", "sat", "the"]
    assert blocked.terms == single.terms
    assert blocked.rows == single.rows
    a = blocked.find("a")
    assert {t: blocked.value(a, t) for t in blocked.terms} == {
        "bark": 0, "cat": 1, "dogs": 0, "ran": 0, "sat": 1, "the": 1,
    }


def test_merge_blocks_reads_in_block_order(tmp_path):
    store = BlockStore(tmp_path)
    # written out of order; rows must follow block ids
    store.write(Block(10, ["z"], [DocumentRow("last", "k", {"z": 1})]))
    store.write(Block(2, ["y"], [DocumentRow("middle", "k", {"y": 1})]))
    store.write(Block(1, ["x"], [DocumentRow("first", "k", {"x": 1})]))
    index = merge_blocks(store)
    assert [r.doc_id for r in index.rows] == ["first", "middle", "last"]
    assert index.terms == ["x", "y", "z"]


def test_merge_empty_store(tmp_path):
    index = merge_blocks(BlockStore(tmp_path))
    assert len(index) == 0
    assert index.attributes == ["@nameOfTheDocument", "@classOfTheDocument"]


def test_unreadable_block_aborts_merge(tmp_path):
    store = BlockStore(tmp_path)
    store.write(Block(0, [], [DocumentRow("d1", "k")]))
    (tmp_path / "block1.msgpack.gz").write_bytes(b"garbage")
    with pytest.raises(BlockIOError):
        merge_blocks(store)
