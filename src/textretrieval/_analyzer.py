"""Delimiter tokenizer with optional Snowball stemming."""

from __future__ import annotations

import re

import Stemmer

# Classic word-tokenizer delimiters: whitespace plus common punctuation.
DEFAULT_DELIMITERS = " \r\n\t.,;:'\"()?!"


class Analyzer:
    """Turn raw document text into normalised tokens.

    Tokens are produced by splitting on runs of delimiter characters,
    trimming and lowercasing each piece, and optionally reducing it with
    the Snowball English stemmer. Empty tokens are dropped.
    """

    __slots__ = ("_split_re", "_stemmer", "_delimiters")

    def __init__(
        self,
        stemming: bool = False,
        delimiters: str = DEFAULT_DELIMITERS,
    ) -> None:
        if not delimiters:
            raise ValueError("delimiters must not be empty")
        self._delimiters = delimiters
        self._split_re = re.compile(f"[{re.escape(delimiters)}]+")
        self._stemmer = Stemmer.Stemmer("english") if stemming else None

    @property
    def stemming(self) -> bool:
        return self._stemmer is not None

    @property
    def delimiters(self) -> str:
        return self._delimiters

    def tokenize(self, text: str) -> list[str]:
        tokens: list[str] = []
        for piece in self._split_re.split(text):
            token = piece.strip().lower()
            if not token:
                continue
            if self._stemmer is not None:
                token = self._stemmer.stemWord(token)
                if not token:
                    continue
            tokens.append(token)
        return tokens

    def count(self, text: str) -> int:
        """Return the number of tokens tokenize() would yield."""
        return len(self.tokenize(text))
