"""Tests for command configuration."""

from pathlib import Path

import pytest

from textretrieval import DEFAULT_TOPICS, IndexConfig, MatchConfig, UsageError, load_topics


def test_index_defaults():
    config = IndexConfig()
    assert config.block_size == 100
    assert (config.upper, config.lower) == (-1, -1)
    assert not config.stemming
    assert config.blocks_dir == Path("blocks")
    assert config.index_path == Path("index.msgpack.gz")


def test_invalid_block_size():
    with pytest.raises(UsageError, match="blockSize"):
        IndexConfig(block_size=0)


def test_default_topics():
    assert len(DEFAULT_TOPICS) == 20
    assert DEFAULT_TOPICS[0] == "misc.forsale/76057"
    assert DEFAULT_TOPICS[-1] == "sci.med/59456"
    assert MatchConfig().topics == DEFAULT_TOPICS


def test_empty_topics_rejected():
    with pytest.raises(UsageError):
        MatchConfig(topics=())


def test_load_topics(tmp_path):
    path = tmp_path / "topics.txt"
    path.write_text("# reference topics\nsci.med/1\n\n  rec.autos/2  \n")
    assert load_topics(path) == ("sci.med/1", "rec.autos/2")


def test_load_topics_missing(tmp_path):
    with pytest.raises(UsageError, match="topics file"):
        load_topics(tmp_path / "nope.txt")
