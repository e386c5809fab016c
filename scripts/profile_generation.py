import os
import sys
import time
from statistics import mean, pstdev

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cavern.dungeon import Dungeon  # noqa: E402

SEEDS = [11, 222, 3333, 4444, 55555, 67890, 72223, 88888, 99999, 123456]
SIZE = (60, 60)


def run():
    runtimes = []
    phase_totals = {}
    for s in SEEDS:
        t0 = time.perf_counter()
        d = Dungeon(SIZE[1], SIZE[0], seed=s)
        t1 = time.perf_counter()
        rt = (t1 - t0) * 1000
        print(f"seed={s} ms={rt:.1f} attempts={d.metrics.get('attempts')} rounds={d.metrics.get('secret_passage_rounds')}")
        for phase, ms in d.metrics.get("phase_ms", {}).items():
            phase_totals[phase] = phase_totals.get(phase, 0) + ms
        runtimes.append(rt)
    print("\nSummary:")
    print(
        f"count={len(runtimes)} avg_ms={mean(runtimes):.1f} sd_ms={pstdev(runtimes):.1f} min_ms={min(runtimes):.1f} max_ms={max(runtimes):.1f}"
    )
    for phase, ms in sorted(phase_totals.items(), key=lambda kv: -kv[1]):
        print(f"  {phase:24} total_ms={ms}")


if __name__ == "__main__":
    run()
