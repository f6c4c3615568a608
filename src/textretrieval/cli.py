"""Command-line entry point: ``textretrieval index|match``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ._config import INDEX_FILE, IndexConfig, MatchConfig, load_topics
from ._errors import TextRetrievalError, UsageError
from ._pipeline import index_collection, match_topics
from ._runs import PostingListSize

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="textretrieval",
        description="Blocked indexing and Okapi BM25 find-similar retrieval",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    index = sub.add_parser("index", help="build the index of a document collection")
    index.add_argument("-s", "--source", type=Path, default=Path("."),
                       help="source directory for the files to index")
    index.add_argument("-t", "--target", type=Path, default=Path("."),
                       help="target directory for the index file and the blocks folder")
    index.add_argument("-b", "--blockSize", dest="block_size", type=int, default=100,
                       help="number of documents per block")
    index.add_argument("-e", "--stemming", type=_parse_bool, default=False,
                       help="stem words (true/false)")
    index.add_argument("-u", "--upper", type=int, default=-1,
                       help="upper bound for frequency thresholding")
    index.add_argument("-l", "--lower", type=int, default=-1,
                       help="lower bound for frequency thresholding")
    index.add_argument("--encoding", default="utf-8", help="encoding of the source files")

    match = sub.add_parser("match", help="find similar documents for the topic set")
    match.add_argument("-i", "--indexFile", dest="index_file", type=Path,
                       default=Path(INDEX_FILE), help="index file to score against")
    match.add_argument("-s", "--source", type=Path, default=Path("."),
                       help="source directory for the files to score")
    match.add_argument("-t", "--target", type=Path, default=Path("."),
                       help="target directory for the similarity result files")
    match.add_argument("--size", type=PostingListSize,
                       choices=list(PostingListSize), default=PostingListSize.MEDIUM,
                       help="posting list size tag of the run")
    match.add_argument("--topics", type=Path, default=None,
                       help="file with one query document ID per line")
    match.add_argument("--encoding", default="utf-8", help="encoding of the source files")
    return parser


def _configure_logging(verbose: bool) -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run(args: argparse.Namespace) -> None:
    if args.command == "index":
        index_collection(IndexConfig(
            source=args.source,
            target=args.target,
            block_size=args.block_size,
            stemming=args.stemming,
            upper=args.upper,
            lower=args.lower,
            encoding=args.encoding,
        ))
    elif args.command == "match":
        config = MatchConfig(
            index_file=args.index_file,
            source=args.source,
            target=args.target,
            size=args.size,
            encoding=args.encoding,
        )
        if args.topics is not None:
            config = replace(config, topics=load_topics(args.topics))
        match_topics(config)
    else:
        raise UsageError("a command is required: index or match")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    try:
        args = parser.parse_args(argv)
        _configure_logging(args.verbose)
        _run(args)
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        parser.print_usage(sys.stderr)
        return 2
    except TextRetrievalError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
