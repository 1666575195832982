# term_autocompleter/core/ranker.py
"""
Ranker - deterministic ordering of prefix candidates.

Ordering is total, so repeated queries over unchanged state always agree:
 1. count descending
 2. last_updated descending (recently registered terms win ties)
 3. key ascending

Boost is applied to the ordered list and only then is it truncated to
`limit`, so a boosted term sitting below the cut still reaches slot 0.
Boost can only reorder candidates; it never introduces one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from term_autocompleter.core.term_store import TermRecord
from term_autocompleter.core.trie import fold
from term_autocompleter.errors import InvalidInput

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class Suggestion:
    term: str
    count: int

    def to_dict(self) -> Dict[str, Union[str, int]]:
        return {"term": self.term, "count": self.count}


def _sort_key(rec: TermRecord):
    return (-rec.count, -rec.last_updated, rec.key)


def apply_boost(ordered: List[TermRecord], boost: Optional[str]) -> List[TermRecord]:
    """
    Move the record whose key equals fold(boost) to the front.
    Absent or already-first boost leaves the list as is.
    """
    if not boost:
        return ordered
    target = fold(boost)
    for idx, rec in enumerate(ordered):
        if rec.key == target:
            if idx == 0:
                return ordered
            return [rec] + ordered[:idx] + ordered[idx + 1:]
    return ordered


class Ranker:
    """
    Turns a candidate set into the top `limit` suggestions.
    Stateless apart from the default limit, so one instance is shared freely.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = self._check_limit(limit)

    @staticmethod
    def _check_limit(limit: int) -> int:
        # bool is an int subclass, reject it explicitly
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidInput(f"limit must be a positive integer, got {limit!r}", field="limit")
        return limit

    def order(self, candidates: Iterable[TermRecord]) -> List[TermRecord]:
        """Full ordering without boost or truncation."""
        return sorted(candidates, key=_sort_key)

    def rank(
        self,
        candidates: Iterable[TermRecord],
        boost: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Suggestion]:
        limit = self.limit if limit is None else self._check_limit(limit)
        ordered = apply_boost(self.order(candidates), boost)
        return [Suggestion(term=rec.display, count=rec.count) for rec in ordered[:limit]]
