# term_store.py
"""
TermStore - canonical record of every known term.

One TermRecord per case-folded key, holding:
 - display: casing as first registered (or latest, see `casing_policy`)
 - count: how many times the term was registered minus deletions
 - last_updated: sequence number of the most recent registration

A record never sits at count 0: decrement drops it the moment it hits zero.
The store itself is not locked; AutoCompleter serialises access to it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional

CASING_POLICIES = ("first", "latest")


@dataclass
class TermRecord:
    key: str
    display: str
    count: int = 1
    last_updated: int = 0

    def snapshot(self) -> "TermRecord":
        """Detached copy, safe to hand out after the lock is released."""
        return replace(self)


@dataclass(frozen=True)
class DecrementResult:
    existed: bool
    removed: bool
    remaining_count: int


class TermStore:
    def __init__(self, casing_policy: str = "first"):
        if casing_policy not in CASING_POLICIES:
            raise ValueError(f"unknown casing policy: {casing_policy!r}")
        self.casing_policy = casing_policy
        self._records: Dict[str, TermRecord] = {}

    def upsert(self, key: str, display: str, now: int) -> TermRecord:
        """Create the record with count 1, or bump count and last_updated."""
        rec = self._records.get(key)
        if rec is None:
            rec = TermRecord(key=key, display=display, count=1, last_updated=now)
            self._records[key] = rec
            return rec.snapshot()

        rec.count += 1
        rec.last_updated = now
        if self.casing_policy == "latest":
            rec.display = display
        return rec.snapshot()

    def decrement(self, key: str) -> DecrementResult:
        rec = self._records.get(key)
        if rec is None:
            return DecrementResult(existed=False, removed=False, remaining_count=0)

        rec.count -= 1
        if rec.count <= 0:
            del self._records[key]
            return DecrementResult(existed=True, removed=True, remaining_count=0)
        return DecrementResult(existed=True, removed=False, remaining_count=rec.count)

    def get(self, key: str) -> Optional[TermRecord]:
        rec = self._records.get(key)
        return rec.snapshot() if rec is not None else None

    def keys(self) -> Iterator[str]:
        return iter(list(self._records))

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)
