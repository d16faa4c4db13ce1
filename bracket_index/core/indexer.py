# indexer.py
"""
BracketIndex - build-then-query facade.

Purpose:
 - Own the PrefixTrie instance
 - Build it from a source file (or any iterable of lines) through the extractor
 - Answer queries with QueryResult values the CLI can print

Public API:
  - BracketIndex.from_file(path, encoding) -> BracketIndex
  - build(lines) -> int
  - query(token) -> QueryResult
  - query_all(tokens, sentinel="0") -> Iterator[QueryResult]
  - stats() -> Dict[str, int]
"""

from __future__ import annotations
import codecs
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Union

from bracket_index.core.errors import FileAccessError
from bracket_index.core.extractor import TokenRecord, extract_records, iter_lines
from bracket_index.core.trie import NOT_FOUND, Position, PrefixTrie

logger = logging.getLogger(__name__)

END_OF_QUERIES = "0"


@dataclass(frozen=True)
class QueryResult:
    token: str
    count: int
    position: Optional[Position] = None

    @property
    def is_prefix(self) -> bool:
        return self.count > 0

    def lines(self) -> List[str]:
        """Report lines for this result, in the wording the CLI prints."""
        if not self.is_prefix:
            return [f"{self.token} is not prefix"]
        out = [f"{self.token} is prefix of {self.count} words"]
        if self.position is not None:
            out.append(f"{self.token} is at ({self.position.offset},{self.position.line_length})")
        return out


class BracketIndex:
    """Trie of bracket tokens plus the bookkeeping of how it was built."""

    def __init__(self, trie: Optional[PrefixTrie] = None, encoding: str = "utf-8") -> None:
        # unknown codec names fail here, before any file is touched
        self.encoding = codecs.lookup(encoding).name
        self.trie = trie if trie is not None else PrefixTrie()
        self.source: Optional[str] = None
        self.records = 0
        self.lines = 0

    @classmethod
    def from_file(cls, path: str, encoding: str = "utf-8") -> "BracketIndex":
        """
        Open `path`, index every line and close it again.
        The file is read as bytes: lines end at b"\\n" only and offsets count bytes.
        Token text is decoded with `encoding`, undecodable bytes are kept
        as surrogate escapes rather than failing the run.
        Raises FileAccessError if the file can't be opened or read;
        in that case nothing is returned, so no half-built index escapes.
        """
        index = cls(encoding=encoding)
        try:
            with open(path, "rb") as f:
                index.build(iter_lines(f))
        except OSError as e:
            raise FileAccessError(path, str(e)) from e
        index.source = path
        logger.info("indexed %d tokens from %d lines of %s", index.records, index.lines, path)
        return index

    # build ---------------------------------------------------------
    def build(self, lines: Iterable[Union[bytes, str]]) -> int:
        """Feed every record from `lines` into the trie. Returns how many were inserted."""

        def _counted(it: Iterable[Union[bytes, str]]) -> Iterator[Union[bytes, str]]:
            for line in it:
                self.lines += 1
                yield line

        inserted = 0
        for rec in extract_records(_counted(lines), self.encoding):
            self.add(rec)
            inserted += 1
        return inserted

    def add(self, rec: TokenRecord) -> None:
        self.trie.insert(rec.text, rec.offset, rec.line_length)
        self.records += 1

    # queries ---------------------------------------------------------
    def query(self, token: str) -> QueryResult:
        count = self.trie.count_with_prefix(token)
        if count == 0:
            return QueryResult(token, 0)
        pos = self.trie.lookup_exact(token)
        if pos.offset == NOT_FOUND.offset:
            return QueryResult(token, count)
        return QueryResult(token, count, pos)

    def query_all(self, tokens: Iterable[str], sentinel: str = END_OF_QUERIES) -> Iterator[QueryResult]:
        """Answer tokens in order until `sentinel` (never queried) or the input runs out."""
        for tok in tokens:
            if tok == sentinel:
                logger.debug("sentinel %r reached", sentinel)
                return
            yield self.query(tok)

    def stats(self) -> Dict[str, int]:
        return {"lines": self.lines, "records": self.records, "entries": len(self.trie)}
