"""
bracket_index

Indexes the [bracketed] token of each line of a text file into a prefix trie
and answers prefix-count and definition-position queries.
"""

from .core import BracketIndex, FileAccessError, Position, PrefixTrie, QueryResult

__all__ = ["BracketIndex", "FileAccessError", "Position", "PrefixTrie", "QueryResult"]

__version__ = "0.1.0"
