"""
bracket_index.core

Indexing engine:
 - bracket token extraction with line offsets (extractor)
 - prefix trie with per-entry positions (trie)
 - build-then-query facade (indexer)
"""

from .errors import BracketIndexError, FileAccessError
from .extractor import TokenRecord, extract_records, find_token, iter_lines
from .trie import NOT_FOUND, Position, PrefixTrie, TrieNode
from .indexer import BracketIndex, QueryResult

__all__ = [
    "BracketIndex",
    "BracketIndexError",
    "FileAccessError",
    "NOT_FOUND",
    "Position",
    "PrefixTrie",
    "QueryResult",
    "TokenRecord",
    "TrieNode",
    "extract_records",
    "find_token",
    "iter_lines",
]
