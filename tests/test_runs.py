"""Tests for TREC-style run files."""

import pytest

from textretrieval import OutputIOError, PostingListSize, Rank, RunWriter, format_score


def test_first_line_format(tmp_path):
    writer = RunWriter(tmp_path, PostingListSize.MEDIUM)
    path = writer.write(1, [Rank(3.14, "X"), Rank(1.5, "Y")])
    assert path.name == "medium_topic1_groupG.txt"
    data = path.read_bytes().decode("utf-8")
    assert data.split("\r\n")[0] == "topic1 Q0 X 1 3.14 groupG_medium"
    assert data == (
        "topic1 Q0 X 1 3.14 groupG_medium\r\n"
        "topic1 Q0 Y 2 1.5 groupG_medium\r\n"
    )


def test_size_accepts_plain_strings(tmp_path):
    writer = RunWriter(tmp_path, "large")
    assert writer.path_for(7).name == "large_topic7_groupG.txt"


def test_creates_parent_directories(tmp_path):
    target = tmp_path / "runs" / "nested"
    path = RunWriter(target, PostingListSize.SMALL).write(3, [Rank(0.5, "d")])
    assert path.parent == target
    assert path.read_bytes().endswith(b"groupG_small\r\n")


def test_unwritable_target(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(OutputIOError, match="Error saving results"):
        RunWriter(blocker / "runs").write(1, [])


def test_empty_slots_are_written_as_null(tmp_path):
    ranks = [Rank(2.5, "k/d1")] + [Rank(0.0, None)] * 9
    data = RunWriter(tmp_path).write(1, ranks).read_bytes().decode("utf-8")
    lines = data.split("\r\n")
    assert lines[-1] == ""
    assert len(lines[:-1]) == 10
    assert lines[0] == "topic1 Q0 k/d1 1 2.5 groupG_medium"
    assert lines[1:-1] == [
        f"topic1 Q0 null {n} 0.0 groupG_medium" for n in range(2, 11)
    ]


@pytest.mark.parametrize("score, text", [
    (3.14, "3.14"),
    (123.0, "123.0"),
    (-2.5, "-2.5"),
    (0.0, "0.0"),
    (0.001, "0.001"),
    (1e-5, "1.0E-5"),
    (0.00012345, "1.2345E-4"),
    (1e7, "1.0E7"),
    (12345678.9, "1.23456789E7"),
    (9999999.0, "9999999.0"),
    (float("nan"), "NaN"),
    (float("-inf"), "-Infinity"),
])
def test_score_text(score, text):
    assert format_score(score) == text
