"""Command configuration and the reference topic set."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ._errors import UsageError
from ._runs import PostingListSize
from ._storage import EXTENSION

BLOCK_DIR = "blocks"
INDEX_FILE = f"index{EXTENSION}"

DEFAULT_TOPICS: tuple[str, ...] = (
    "misc.forsale/76057",
    "talk.religion.misc/83561",
    "talk.politics.mideast/75422",
    "sci.electronics/53720",
    "sci.crypt/15725",
    "misc.forsale/76165",
    "talk.politics.mideast/76261",
    "alt.atheism/53358",
    "sci.electronics/54340",
    "rec.motorcycles/104389",
    "talk.politics.guns/54328",
    "misc.forsale/76468",
    "sci.crypt/15469",
    "rec.sport.hockey/54171",
    "talk.religion.misc/84177",
    "rec.motorcycles/104727",
    "comp.sys.mac.hardware/52165",
    "sci.crypt/15379",
    "sci.space/60779",
    "sci.med/59456",
)


@dataclass(slots=True, frozen=True)
class IndexConfig:
    source: Path = Path(".")
    target: Path = Path(".")
    block_size: int = 100
    stemming: bool = False
    upper: int = -1   # negative disables
    lower: int = -1   # negative disables
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.block_size < 1:
            raise UsageError(f"blockSize must be >= 1, got {self.block_size}")

    @property
    def blocks_dir(self) -> Path:
        return Path(self.target) / BLOCK_DIR

    @property
    def index_path(self) -> Path:
        return Path(self.target) / INDEX_FILE


@dataclass(slots=True, frozen=True)
class MatchConfig:
    index_file: Path = Path(INDEX_FILE)
    source: Path = Path(".")
    target: Path = Path(".")
    size: PostingListSize = PostingListSize.MEDIUM
    topics: tuple[str, ...] = DEFAULT_TOPICS
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.topics:
            raise UsageError("topic list must not be empty")


def load_topics(path: Path | str) -> tuple[str, ...]:
    """Read query document IDs, one per line; blanks and ``#`` lines skipped."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise UsageError(f"Cannot read topics file {path}: {exc}") from exc
    topics = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            topics.append(line)
    return tuple(topics)
