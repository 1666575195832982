# trie.py
# Prefix tree over case-folded term keys.
# Answers "which keys start with this prefix" without scanning every stored term.
# Supports removal with pruning so the tree shrinks back as terms churn.

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Set, Tuple


def fold(text: str) -> str:
    """Case-fold a term or prefix into its identity form."""
    return text.casefold()


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    key: the full folded key when a stored key terminates here, else None
    """

    __slots__ = ("children", "key")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.key: Optional[str] = None

    def is_leaf(self) -> bool:
        return not self.children and self.key is None


class Trie:
    """
    Trie index used by the AutoCompleter for:
     - prefix-based candidate gathering
     - O(len(key)) insert / remove
     - pruning dead branches on remove so memory tracks the live term set

    Keys are folded on the way in; callers may pass either casing.
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    # insertion -----------------------------------------------------
    def insert(self, key: str) -> bool:
        """
        Add a key. Idempotent: returns False when the key was already present.
        """
        key = fold(key)
        node = self._root
        for ch in key:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = TrieNode()
                node.children[ch] = nxt
            node = nxt
        if node.key is not None:
            return False
        node.key = key
        self._size += 1
        return True

    # removal -----------------------------------------------------
    def remove(self, key: str) -> bool:
        """
        Remove a key and prune every node left with no children and no key.
        Returns False if the key was not stored.
        """
        key = fold(key)
        path: List[Tuple[TrieNode, str]] = []
        node = self._root
        for ch in key:
            nxt = node.children.get(ch)
            if nxt is None:
                return False
            path.append((node, ch))
            node = nxt
        if node.key is None:
            return False

        node.key = None
        self._size -= 1

        # walk back up, dropping empty branches
        for parent, ch in reversed(path):
            child = parent.children[ch]
            if not child.is_leaf():
                break
            del parent.children[ch]
        return True

    # search/traversal ---------------------------------------------------------
    def keys_with_prefix(self, prefix: str) -> Set[str]:
        """
        Return every stored key starting with `prefix` (folded).
        Empty prefix returns all keys. No ordering; ranking happens elsewhere.
        """
        node = self._find(fold(prefix))
        if node is None:
            return set()
        return set(self._iter_keys(node))

    def _find(self, folded_prefix: str) -> Optional[TrieNode]:
        node = self._root
        for ch in folded_prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    @staticmethod
    def _iter_keys(start: TrieNode) -> Iterator[str]:
        """DFS with an explicit stack, long keys would blow the recursion limit."""
        stack = [start]
        while stack:
            node = stack.pop()
            if node.key is not None:
                yield node.key
            stack.extend(node.children.values())

    # convenience/debugging -----------------------------------------------------
    def node_count(self) -> int:
        """
        Count nodes including the root.
        (O(N) walk, for inspection and tests, not runtime.)
        """
        total = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children.values())
        return total

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: str) -> bool:
        """Exact membership check (not prefix)."""
        node = self._find(fold(key))
        return node is not None and node.key is not None
