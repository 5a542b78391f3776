"""Benchmark: block sanitization and rule composition throughput.

Measures how many batches ``BlockSanitizer.sanitize_blocks`` can process
per second, and how fast rules compose with and without the cache.
"""
from __future__ import annotations

import copy
import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blocksan.composer import RuleComposer
from blocksan.sanitizer import BlockSanitizer
from blocksan.tools.builtin import default_registry

_ITERATIONS: int = 500
_COMPOSE_ITERATIONS: int = 5_000

_SAMPLE_BLOCKS: list[dict[str, object]] = [
    {"tool": "header", "data": {"text": "Release <b>notes</b>", "level": 2}},
    {
        "tool": "paragraph",
        "data": {
            "text": '<script>track()</script>See <a href="https://example.com" '
            'onclick="x()">the docs</a> for <i>details</i>.'
        },
    },
    {
        "tool": "list",
        "data": {"style": "unordered", "items": ["<b>fast</b>", "safe<br>simple", "<u>done</u>"]},
    },
    {"tool": "quote", "data": {"text": "Keep it <mark>clean</mark>", "caption": "me", "alignment": "left"}},
]


def bench_sanitize_throughput() -> dict[str, object]:
    """Benchmark ``sanitize_blocks`` over a four-block document.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    sanitizer = BlockSanitizer(default_registry())
    batches = [copy.deepcopy(_SAMPLE_BLOCKS) for _ in range(_ITERATIONS)]

    start = time.perf_counter()
    for batch in batches:
        sanitizer.sanitize_blocks(batch)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "sanitize_blocks_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_compose_throughput() -> dict[str, object]:
    """Benchmark uncached against cached rule composition.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, cached_ops_per_second.
    """
    composer = RuleComposer(default_registry())

    start = time.perf_counter()
    for _ in range(_COMPOSE_ITERATIONS):
        composer.invalidate()
        composer.compose_tool_config("paragraph")
    total = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(_COMPOSE_ITERATIONS):
        composer.compose_tool_config("paragraph")
    cached_total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "compose_tool_config_throughput",
        "iterations": _COMPOSE_ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_COMPOSE_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _COMPOSE_ITERATIONS * 1000, 4),
        "cached_ops_per_second": round(_COMPOSE_ITERATIONS / max(cached_total, 1e-9), 1),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec uncached  "
        f"{result['cached_ops_per_second']:,.0f} ops/sec cached"
    )
    return result


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_sanitize_throughput, "sanitize_throughput_baseline.json"),
        (bench_compose_throughput, "compose_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
