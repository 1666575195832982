"""
term_autocompleter.core

The in-memory engine behind the autocomplete service.
Contains:
 - TermStore: canonical per-term records and count lifecycle
 - Trie: prefix index over case-folded keys
 - Ranker: deterministic ordering with boost override
 - AutoCompleter: the facade tying them together under one lock
"""

from .term_store import TermRecord, TermStore, DecrementResult
from .trie import Trie, TrieNode, fold
from .ranker import Ranker, Suggestion, DEFAULT_LIMIT
from .autocompleter import AutoCompleter

__all__ = [
    "TermRecord",
    "TermStore",
    "DecrementResult",
    "Trie",
    "TrieNode",
    "fold",
    "Ranker",
    "Suggestion",
    "DEFAULT_LIMIT",
    "AutoCompleter",
]
