# trie.py
# Prefix tree over bracket tokens.
# Each terminal node remembers where its token was defined in the source file:
# the offset of the defining line and that line's length.

from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, NamedTuple

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """Where a token's defining line starts in the source file, and its length."""

    offset: int
    line_length: int


# returned for anything that is not a complete entry
NOT_FOUND = Position(-1, 0)


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    is_terminal: True when some inserted token ends exactly here
    position: Position of the defining line, NOT_FOUND unless is_terminal
    """

    __slots__ = ("children", "is_terminal", "position")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.is_terminal = False
        self.position = NOT_FOUND


class PrefixTrie:
    """
    Trie of indexed tokens, used by BracketIndex for:
     - counting how many tokens start with a prefix
     - finding where a complete token was defined
    The tree only grows; there is no removal.
    """

    def __init__(self) -> None:
        self._root = TrieNode()

    # insertion -----------------------------------------------------
    def insert(self, text: str, offset: int, line_length: int) -> None:
        """
        Insert `text` with the position of its defining line.
        Inserting the same text again overwrites the stored position,
        the last insertion wins. The empty string marks the root itself.
        """
        node = self._root
        for ch in text:
            node = node.children[ch]
        if node.is_terminal:
            logger.debug("re-inserting %r, position %s replaced", text, node.position)
        node.is_terminal = True
        node.position = Position(offset, line_length)

    # search/traversal ---------------------------------------------------------
    def count_with_prefix(self, prefix: str) -> int:
        """
        Number of complete entries that start with `prefix`
        (the prefix itself included when it is an entry).
        Recounts the whole subtree on every call.
        """
        node = self._walk(prefix)
        if node is None:
            return 0
        return self._count_terminals(node)

    def lookup_exact(self, text: str) -> Position:
        """
        Position stored at the node reached by `text`.
        NOT_FOUND when the path does not exist, and also when it exists but
        `text` is only a prefix of other entries: check `offset == -1`.
        """
        node = self._walk(text)
        if node is None:
            return NOT_FOUND
        return node.position

    def _walk(self, s: str) -> TrieNode | None:
        node = self._root
        for ch in s:
            # .get so a lookup never grows the defaultdict
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    # internal subtree counter ---------------------------------------------------------
    @staticmethod
    def _count_terminals(start: TrieNode) -> int:
        """DFS over the subtree under `start`, explicit stack so long tokens can't hit the recursion limit."""
        count = 0
        stack: List[TrieNode] = [start]
        while stack:
            node = stack.pop()
            if node.is_terminal:
                count += 1
            stack.extend(node.children.values())
        return count

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        """Number of distinct entries (O(N) walk)."""
        return self._count_terminals(self._root)

    def __contains__(self, text: str) -> bool:
        """Membership check for complete entries only."""
        node = self._walk(text)
        return node is not None and node.is_terminal
