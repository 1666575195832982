# tests/test_concurrency.py - many threads against one engine
import threading
from concurrent.futures import ThreadPoolExecutor

from term_autocompleter.core.autocompleter import AutoCompleter


def test_concurrent_registrations_same_term():
    ac = AutoCompleter()
    with ThreadPoolExecutor(max_workers=8) as ex:
        results = list(ex.map(lambda _: ac.register("cursor"), range(200)))
    assert max(r["count"] for r in results) == 200
    assert sorted(r["count"] for r in results) == list(range(1, 201))
    assert ac.get("cursor")["count"] == 200


def test_concurrent_register_then_delete_balances_out():
    ac = AutoCompleter()
    words = [f"w{i}" for i in range(20)]

    def work(w):
        for _ in range(25):
            ac.register(w)
        for _ in range(25):
            ac.delete(w)

    with ThreadPoolExecutor(max_workers=8) as ex:
        list(ex.map(work, words * 2))

    assert len(ac) == 0
    assert ac.autocomplete("") == {"suggestions": []}
    assert ac.stats()["trie_nodes"] == 1


def test_readers_never_see_half_applied_mutations():
    ac = AutoCompleter(limit=50)
    stop = threading.Event()
    errors = []

    def writer():
        i = 0
        while not stop.is_set():
            term = f"k{i % 30}"
            ac.register(term)
            ac.delete(term)
            i += 1

    def reader():
        try:
            while not stop.is_set():
                for s in ac.autocomplete("k")["suggestions"]:
                    assert s["count"] >= 1
        except AssertionError as e:  # surfaced in main thread below
            errors.append(e)

    threads = [threading.Thread(target=writer) for _ in range(3)]
    threads += [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    stop.wait(0.5)
    stop.set()
    for t in threads:
        t.join()

    assert errors == []
    st = ac.stats()
    assert st["terms"] == st["indexed"]
