"""
term_autocompleter - in-memory prefix autocomplete with frequency ranking.

    from term_autocompleter import AutoCompleter

    ac = AutoCompleter()
    ac.register("cursor")
    ac.autocomplete("cur")   # {"suggestions": [{"term": "cursor", "count": 1}]}
"""

from term_autocompleter.core import AutoCompleter, Suggestion
from term_autocompleter.errors import AutocompleteError, InvalidInput

__all__ = ["AutoCompleter", "Suggestion", "AutocompleteError", "InvalidInput"]

__version__ = "0.1.0"
