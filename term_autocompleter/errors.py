# errors.py - exception types raised by the autocomplete engine
"""
Unknown terms are not errors: deleting or looking up a term that was never
registered returns the normal "absent" result shape. Only malformed input is
rejected, and always before any state is touched.
"""


class AutocompleteError(Exception):
    """Base class for engine errors."""


class InvalidInput(AutocompleteError, ValueError):
    """Raised for blank terms, non-string input or a bad suggestion limit."""

    def __init__(self, message: str, field: str = "term"):
        super().__init__(message)
        self.field = field
