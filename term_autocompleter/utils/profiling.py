# profiling.py
"""
Small profiling harness for AutoCompleter.autocomplete.
Usage:
  python -m term_autocompleter.utils.profiling --terms 20000 --iters 500

Fills an engine with synthetic terms, then prints median/p90/max latency per
query for the trie path next to a naive scan over every term, so the gap is
visible as the term set grows.
"""
import argparse
import random
import string
import time
from statistics import mean, median
from typing import Callable, Dict, List

from term_autocompleter.core.autocompleter import AutoCompleter


def synthetic_terms(n: int, seed: int = 7) -> List[str]:
    rng = random.Random(seed)
    out = []
    for _ in range(n):
        size = rng.randint(3, 12)
        word = "".join(rng.choice(string.ascii_lowercase) for _ in range(size))
        # some capitalised entries so folding is exercised
        out.append(word.title() if rng.random() < 0.1 else word)
    return out


def populate(ac: AutoCompleter, terms: List[str], seed: int = 7) -> None:
    rng = random.Random(seed)
    for t in terms:
        # skewed repeat counts, like real query logs
        for _ in range(1 + int(rng.paretovariate(2.0)) % 20):
            ac.register(t)


def linear_scan(terms: Dict[str, int], prefix: str, limit: int = 5) -> List[str]:
    """Baseline: fold and test every stored term."""
    p = prefix.casefold()
    hits = [(c, k) for k, c in terms.items() if k.startswith(p)]
    hits.sort(key=lambda kv: (-kv[0], kv[1]))
    return [k for _, k in hits[:limit]]


def benchmark(fn: Callable[[str], object], queries: List[str], iterations: int = 200, seed: int = 11) -> List[float]:
    rng = random.Random(seed)
    times = []
    for _ in range(iterations):
        q = rng.choice(queries)
        t0 = time.perf_counter()
        fn(q)
        times.append((time.perf_counter() - t0) * 1000.0)  # ms
    return times


def summarize(times: List[float]) -> Dict[str, float]:
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "mean_ms": mean(times_sorted),
        "median_ms": median(times_sorted),
        "p90_ms": times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)],
        "max_ms": max(times_sorted),
    }


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--terms", type=int, default=20000, help="distinct synthetic terms")
    parser.add_argument("--iters", type=int, default=500, help="measured queries")
    parser.add_argument("--warm", type=int, default=50, help="warmup queries")
    args = parser.parse_args(argv)

    ac = AutoCompleter()
    terms = synthetic_terms(args.terms)
    t0 = time.perf_counter()
    populate(ac, terms)
    print(f"populated {len(ac)} terms in {time.perf_counter() - t0:.2f}s")

    counts = {}
    for t in terms:
        rec = ac.get(t)
        if rec is not None:
            counts[t.casefold()] = rec["count"]

    queries = [t[:n] for t in terms[:200] for n in (1, 2, 3)]
    benchmark(ac.autocomplete, queries, iterations=args.warm)

    trie_s = summarize(benchmark(ac.autocomplete, queries, iterations=args.iters))
    scan_s = summarize(benchmark(lambda q: linear_scan(counts, q), queries, iterations=args.iters))
    print("trie (ms):", {k: round(v, 4) for k, v in trie_s.items()})
    print("scan (ms):", {k: round(v, 4) for k, v in scan_s.items()})
    print("sample:", ac.autocomplete(queries[0]))
    return trie_s, scan_s


if __name__ == "__main__":
    main()
