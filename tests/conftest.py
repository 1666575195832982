import pytest

from term_autocompleter.core.autocompleter import AutoCompleter


@pytest.fixture
def ac():
    return AutoCompleter()


@pytest.fixture
def cur_terms(ac):
    """cursor x2, curly x1, current x3"""
    for t in ["cursor", "cursor", "curly", "current", "current", "current"]:
        ac.register(t)
    return ac
