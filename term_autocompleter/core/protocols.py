# term_autocompleter/core/protocols.py
"""
Typed response shapes returned by the AutoCompleter facade.

These are the JSON bodies of the HTTP routes; field names are fixed so any
transport can serialise them directly with json.dumps.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from typing_extensions import TypedDict


class SuggestionDict(TypedDict):
    term: str
    count: int


class TermResponse(TypedDict):
    """Body of POST /terms."""
    term: str
    count: int


class AutocompleteResponse(TypedDict):
    """Body of GET /autocomplete, ordered best first."""
    suggestions: List[SuggestionDict]


class DeleteTermResponse(TypedDict):
    """Body of DELETE /terms/<term>."""
    deleted: bool
    remaining: int


class AutocompleteServiceProtocol(Protocol):
    """What a transport needs from the engine."""

    def register(self, term: str) -> TermResponse:
        ...

    def autocomplete(self, prefix: str, boost: Optional[str] = None) -> AutocompleteResponse:
        ...

    def delete(self, term: str) -> DeleteTermResponse:
        ...

    def __len__(self) -> int:
        ...
