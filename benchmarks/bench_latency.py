"""Benchmark: single-string clean latency (p50/p95/mean)."""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import blocksan

_WARMUP: int = 100
_ITERATIONS: int = 2_000

_RULES = {"b": True, "i": True, "a": {"href": True, "rel": "nofollow"}, "br": True}

_TAINTED = (
    '<p onclick="steal()">Hello <b>World</b><br>'
    '<a href="javascript:alert(1)">bad</a> <a href="https://example.com">good</a>'
    "<script>document.cookie</script><style>body{}</style><i>end</i></p>"
)


def bench_clean_latency() -> dict[str, object]:
    """Benchmark ``blocksan.clean`` latency on a small tainted fragment.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    for _ in range(_WARMUP):
        blocksan.clean(_TAINTED, _RULES)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        blocksan.clean(_TAINTED, _RULES)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "clean_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    result = bench_clean_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
