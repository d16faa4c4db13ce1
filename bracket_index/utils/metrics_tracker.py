# metrics_tracker.py - running sums/counts per key, shown as a rich table

from collections import defaultdict

from rich import box
from rich.table import Table


class Metrics:
    def __init__(self):
        self.m = defaultdict(float)
        self.n = defaultdict(int)

    def record(self, key, val):
        self.m[key] += val
        self.n[key] += 1

    def total(self, key):
        return self.m.get(key, 0.0)

    def count(self, key):
        return self.n.get(key, 0)

    def avg(self, key):
        if self.n.get(key, 0) == 0:
            return 0.0
        return self.m[key] / self.n[key]

    def table(self):
        t = Table(title="Metrics", box=box.SIMPLE)
        t.add_column("Metric", style="cyan")
        t.add_column("Count", justify="right")
        t.add_column("Total", justify="right")
        t.add_column("Avg", justify="right", style="magenta")
        for k in sorted(self.m):
            t.add_row(k, str(self.n[k]), f"{self.m[k]:.6f}", f"{self.avg(k):.6f}")
        return t
