# autocompleter.py
"""
AutoCompleter - application facade.

Purpose:
 - Own one TermStore and one Trie and keep them in step
 - Simple public API for the HTTP server / CLI / tests:
     register(term), autocomplete(prefix, boost), delete(term), get(term), stats()
 - Validate input before touching any state

Concurrency:
 every paired store+index mutation, and the candidate gathering of a query,
 runs under one lock, so no reader sees a key in one structure but not the
 other. Ranking works on snapshots outside the lock.

Construct one per hosting process and pass it to the transport; there is no
module-level instance.
"""

from __future__ import annotations

import itertools
import threading
from typing import Any, Dict, List, Optional

from term_autocompleter.core.protocols import (
    AutocompleteResponse,
    DeleteTermResponse,
    TermResponse,
)
from term_autocompleter.core.ranker import DEFAULT_LIMIT, Ranker
from term_autocompleter.core.term_store import TermRecord, TermStore
from term_autocompleter.core.trie import Trie, fold
from term_autocompleter.errors import InvalidInput
from term_autocompleter.utils.logger_utils import Log, get_logger
from term_autocompleter.utils.metrics_tracker import Metrics

logger = get_logger(__name__)


def _require_term(term: Any) -> str:
    if not isinstance(term, str):
        raise InvalidInput(f"term must be a string, got {type(term).__name__}")
    if not term.strip():
        raise InvalidInput("term must not be empty or whitespace")
    return term


class AutoCompleter:
    """Application facade exposing small API
    Public API:
      - register(term) -> {"term", "count"}
      - autocomplete(prefix, boost=None) -> {"suggestions": [...]}
      - delete(term) -> {"deleted", "remaining"}
      - get(term) -> {"term", "count"} | None
      - stats() -> Dict[str, Any]
    """

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        casing_policy: str = "first",
        metrics: Optional[Metrics] = None,
    ):
        self._store = TermStore(casing_policy=casing_policy)
        self._index = Trie()
        self._ranker = Ranker(limit=limit)
        self._lock = threading.RLock()
        self._seq = itertools.count(1)
        self.metrics = metrics if metrics is not None else Metrics()
        logger.debug("AutoCompleter ready limit=%d casing=%s", limit, casing_policy)

    @classmethod
    def from_config(cls, cfg, metrics: Optional[Metrics] = None) -> "AutoCompleter":
        return cls(
            limit=cfg.get("max_suggestions"),
            casing_policy=cfg.get("casing_policy"),
            metrics=metrics,
        )

    @property
    def limit(self) -> int:
        return self._ranker.limit

    # Mutation ---------------------------------------------------------
    def register(self, term: str) -> TermResponse:
        term = _require_term(term)
        key = fold(term)
        with Log.time_block("register_time", self.metrics):
            with self._lock:
                rec = self._store.upsert(key, term, next(self._seq))
                self._index.insert(key)

        if rec.count == 1:
            logger.info("registered new term %r", rec.display)
        else:
            logger.debug("term %r count=%d", rec.display, rec.count)
        return {"term": rec.display, "count": rec.count}

    def delete(self, term: str) -> DeleteTermResponse:
        # unknown or blank terms are a normal "nothing to delete" outcome
        if not isinstance(term, str) or not term:
            return {"deleted": False, "remaining": 0}

        key = fold(term)
        with Log.time_block("delete_time", self.metrics):
            with self._lock:
                res = self._store.decrement(key)
                if res.removed:
                    self._index.remove(key)

        if not res.existed:
            logger.debug("delete of unknown term %r", term)
        elif res.removed:
            logger.info("removed term %r", term)
        return {"deleted": res.removed, "remaining": res.remaining_count}

    # Queries ---------------------------------------------------------
    def autocomplete(self, prefix: Optional[str] = "", boost: Optional[str] = None) -> AutocompleteResponse:
        if prefix is None:
            prefix = ""
        if not isinstance(prefix, str):
            raise InvalidInput(f"prefix must be a string, got {type(prefix).__name__}", field="prefix")
        if boost is not None and not isinstance(boost, str):
            raise InvalidInput(f"boost must be a string, got {type(boost).__name__}", field="boost")

        with Log.time_block("autocomplete_time", self.metrics):
            candidates = self._gather(prefix)
            ranked = self._ranker.rank(candidates, boost=boost)
        return {"suggestions": [s.to_dict() for s in ranked]}

    def _gather(self, prefix: str) -> List[TermRecord]:
        """Snapshot every record whose key starts with the prefix."""
        with self._lock:
            out = []
            for key in self._index.keys_with_prefix(prefix):
                rec = self._store.get(key)
                # index and store change together under the lock
                assert rec is not None, f"index key {key!r} missing from store"
                out.append(rec)
        return out

    def get(self, term: str) -> Optional[TermResponse]:
        """Exact (case-insensitive) lookup; None when the term is unknown."""
        if not isinstance(term, str) or not term:
            return None
        with self._lock:
            rec = self._store.get(fold(term))
        if rec is None:
            return None
        return {"term": rec.display, "count": rec.count}

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, term: str) -> bool:
        return self.get(term) is not None

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            terms = len(self._store)
            indexed = len(self._index)
            nodes = self._index.node_count()
        return {
            "terms": terms,
            "indexed": indexed,
            "trie_nodes": nodes,
            "limit": self.limit,
            "casing_policy": self._store.casing_policy,
            "ops": self.metrics.snapshot(),
        }
