"""Shared fixtures for textretrieval tests."""

from pathlib import Path

import pytest

from textretrieval import Analyzer, BlockBuilder, BlockMerger, Document, collect_lengths


def write_corpus(root: Path, classes: dict[str, dict[str, str]]) -> Path:
    for class_name, files in classes.items():
        class_dir = root / class_name
        class_dir.mkdir(parents=True, exist_ok=True)
        for name, text in files.items():
            (class_dir / name).write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def make_corpus(tmp_path):
    """Factory writing a ``<class>/<file>`` corpus under tmp_path/corpus."""
    def _make(classes: dict[str, dict[str, str]]) -> Path:
        return write_corpus(tmp_path / "corpus", classes)
    return _make


@pytest.fixture
def small_corpus(make_corpus):
    """The three-document cat/dog corpus."""
    return make_corpus({
        "docs": {
            "a": "the cat sat",
            "b": "the cat ran",
            "c": "dogs bark",
        },
    })


@pytest.fixture
def build_index():
    """Factory building (GlobalIndex, DocumentLengths) from (doc_id, text) pairs in memory."""
    def _build(pairs: list[tuple[str, str]], block_size: int = 2):
        docs = [Document(doc_id, "cls", text) for doc_id, text in pairs]
        analyzer = Analyzer()
        builder = BlockBuilder(analyzer, block_size)
        index = BlockMerger().merge(builder.build(docs))
        return index, collect_lengths(docs, analyzer)
    return _build
