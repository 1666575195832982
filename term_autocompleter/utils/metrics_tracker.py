# metrics_tracker.py - in-memory per-operation counters

import threading
from collections import defaultdict


class Metrics:
    """Running sum/count per key. Process lifetime only, nothing is written to disk."""

    def __init__(self):
        self.m = defaultdict(float)
        self.n = defaultdict(int)
        self._lock = threading.Lock()

    def record(self, key, val):
        with self._lock:
            self.m[key] += val
            self.n[key] += 1

    def count(self, key):
        with self._lock:
            return self.n.get(key, 0)

    def avg(self, key):
        with self._lock:
            n = self.n.get(key, 0)
            if n == 0:
                return 0.0
            return self.m[key] / n

    def snapshot(self):
        with self._lock:
            return {
                k: {"count": self.n[k], "avg": (self.m[k] / self.n[k]) if self.n[k] else 0.0}
                for k in sorted(self.m)
            }

    def reset(self):
        with self._lock:
            self.m.clear()
            self.n.clear()
