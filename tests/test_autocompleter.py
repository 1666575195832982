# tests/test_autocompleter.py
# behaviour of the AutoCompleter facade: register / autocomplete / delete

import pytest

from term_autocompleter.core.autocompleter import AutoCompleter
from term_autocompleter.errors import InvalidInput


def terms(resp):
    return [s["term"] for s in resp["suggestions"]]


# registration ------------------------------------------------------------
def test_register_new_and_existing(ac):
    assert ac.register("cursor") == {"term": "cursor", "count": 1}
    assert ac.register("cursor") == {"term": "cursor", "count": 2}
    assert ac.register("curly") == {"term": "curly", "count": 1}


def test_register_is_case_insensitive_and_keeps_first_casing(ac):
    ac.register("CuRsOr")
    ac.register("cursor")
    assert ac.register("CURSOR") == {"term": "CuRsOr", "count": 3}
    assert len(ac) == 1


def test_latest_casing_policy():
    ac = AutoCompleter(casing_policy="latest")
    ac.register("cursor")
    assert ac.register("Cursor") == {"term": "Cursor", "count": 2}
    assert terms(ac.autocomplete("cur")) == ["Cursor"]


@pytest.mark.parametrize("bad", ["", " ", "\t\n", None, 42])
def test_register_rejects_blank_or_non_string(ac, bad):
    with pytest.raises(InvalidInput):
        ac.register(bad)
    assert len(ac) == 0
    assert ac.autocomplete("")["suggestions"] == []


def test_surrounding_whitespace_is_part_of_term(ac):
    ac.register("  hello  ")
    assert ac.register("  hello  ")["count"] == 2
    assert ac.get("hello") is None
    assert terms(ac.autocomplete("  he")) == ["  hello  "]


def test_special_and_unicode_terms(ac):
    ac.register("hello-world_123")
    ac.register("hello world 日本語")
    assert sorted(terms(ac.autocomplete("hello"))) == ["hello world 日本語", "hello-world_123"]


def test_very_long_term(ac):
    long_term = "a" * 1000
    assert ac.register(long_term) == {"term": long_term, "count": 1}
    assert terms(ac.autocomplete("aaaa")) == [long_term]


# autocomplete ------------------------------------------------------------
def test_scenario_ranking_by_count(cur_terms):
    assert cur_terms.autocomplete("cur") == {
        "suggestions": [
            {"term": "current", "count": 3},
            {"term": "cursor", "count": 2},
            {"term": "curly", "count": 1},
        ]
    }


def test_scenario_boost(cur_terms):
    assert cur_terms.autocomplete("cur", boost="curly") == {
        "suggestions": [
            {"term": "curly", "count": 1},
            {"term": "current", "count": 3},
            {"term": "cursor", "count": 2},
        ]
    }


def test_boost_never_adds_non_matching_term(cur_terms):
    cur_terms.register("dog")
    assert "dog" not in terms(cur_terms.autocomplete("cur", boost="dog"))


def test_boost_outside_top_window_is_promoted(ac):
    for i in range(8):
        for _ in range(10 - i):
            ac.register(f"item{i}")
    out = terms(ac.autocomplete("item", boost="item7"))
    assert out == ["item7", "item0", "item1", "item2", "item3"]


def test_empty_prefix_matches_everything(ac):
    ac.register("CaMeL")
    assert ac.autocomplete("") == {"suggestions": [{"term": "CaMeL", "count": 1}]}
    assert ac.autocomplete(None) == {"suggestions": [{"term": "CaMeL", "count": 1}]}


def test_query_casing_does_not_leak(ac):
    ac.register("CaMeL")
    for q in ("camel", "CAMEL", "cAm"):
        assert terms(ac.autocomplete(q)) == ["CaMeL"]


def test_no_match(ac):
    ac.register("cursor")
    assert ac.autocomplete("xyz") == {"suggestions": []}


def test_recency_breaks_ties(ac):
    ac.register("alpha")
    ac.register("beta")
    ac.register("gamma")
    assert terms(ac.autocomplete("")) == ["gamma", "beta", "alpha"]
    ac.register("alpha")
    ac.register("beta")
    # alpha and beta now at 2, beta touched last
    assert terms(ac.autocomplete("")) == ["beta", "alpha", "gamma"]


def test_limit_invariant(ac):
    for i in range(300):
        ac.register(f"word{i}")
    assert len(ac.autocomplete("word")["suggestions"]) == 5
    assert len(ac.autocomplete("")["suggestions"]) == 5


def test_custom_limit():
    ac = AutoCompleter(limit=2)
    for t in ["aa", "ab", "ac"]:
        ac.register(t)
    assert len(ac.autocomplete("a")["suggestions"]) == 2


def test_ranking_is_deterministic(cur_terms):
    first = cur_terms.autocomplete("c")
    for _ in range(10):
        assert cur_terms.autocomplete("c") == first


def test_prefix_correctness():
    words = ["Apple", "application", "apply", "banana", "band", "Bandana", "app"]
    big = AutoCompleter(limit=100)
    for w in words:
        big.register(w)
    for p in ["", "a", "AP", "app", "appl", "b", "BAN", "band", "z", "apples"]:
        got = set(terms(big.autocomplete(p)))
        want = {w for w in words if w.casefold().startswith(p.casefold())}
        assert got == want, p


def test_autocomplete_rejects_non_string(ac):
    with pytest.raises(InvalidInput):
        ac.autocomplete(5)
    with pytest.raises(InvalidInput):
        ac.autocomplete("a", boost=3)


def test_results_are_copies(cur_terms):
    out = cur_terms.autocomplete("cur")
    out["suggestions"][0]["count"] = 1000
    assert cur_terms.autocomplete("cur")["suggestions"][0]["count"] == 3


# deletion ------------------------------------------------------------
def test_scenario_delete_twice(cur_terms):
    assert cur_terms.delete("cursor") == {"deleted": False, "remaining": 1}
    assert cur_terms.delete("cursor") == {"deleted": True, "remaining": 0}
    assert "cursor" not in terms(cur_terms.autocomplete("cur"))


def test_delete_unknown(ac):
    ac.register("cursor")
    assert ac.delete("neverRegistered") == {"deleted": False, "remaining": 0}
    assert ac.delete("") == {"deleted": False, "remaining": 0}
    assert ac.get("cursor") == {"term": "cursor", "count": 1}


def test_delete_is_case_insensitive(ac):
    ac.register("Cursor")
    assert ac.delete("CURSOR") == {"deleted": True, "remaining": 0}


def test_delete_after_removal(ac):
    ac.register("x")
    ac.delete("x")
    assert ac.delete("x") == {"deleted": False, "remaining": 0}


def test_churn_returns_to_absent(ac):
    n = 7
    for _ in range(n):
        ac.register("churn")
    results = [ac.delete("churn") for _ in range(n)]
    assert [r["deleted"] for r in results] == [False] * (n - 1) + [True]
    assert results[-1]["remaining"] == 0
    assert ac.autocomplete("ch") == {"suggestions": []}
    assert ac.stats()["trie_nodes"] == 1


def test_reregister_after_removal_starts_fresh(ac):
    ac.register("Cursor")
    ac.delete("cursor")
    assert ac.register("cursor") == {"term": "cursor", "count": 1}


# helpers ------------------------------------------------------------
def test_get_and_contains(ac):
    ac.register("Cursor")
    assert ac.get("cursor") == {"term": "Cursor", "count": 1}
    assert "CURSOR" in ac
    assert ac.get("cur") is None
    assert ac.get("") is None


def test_stats_tracks_operations(cur_terms):
    cur_terms.autocomplete("cur")
    cur_terms.delete("curly")
    st = cur_terms.stats()
    assert st["terms"] == 2
    assert st["indexed"] == 2
    assert st["limit"] == 5
    assert st["ops"]["register_time"]["count"] == 6
    assert st["ops"]["autocomplete_time"]["count"] == 1
    assert st["ops"]["delete_time"]["count"] == 1


def test_from_config():
    from term_autocompleter.utils.config_manager import Config

    cfg = Config(max_suggestions=3, casing_policy="latest")
    ac = AutoCompleter.from_config(cfg)
    assert ac.limit == 3
    assert ac.stats()["casing_policy"] == "latest"
