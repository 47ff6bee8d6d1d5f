#!/usr/bin/env python3
"""Performance benchmark for DealerMCP analytics hot paths."""

from __future__ import annotations

import argparse
import tempfile
import time
from pathlib import Path

from dealer_mcp.analytics.loader import parse_rows
from dealer_mcp.analytics.query import QueryCriteria, run_query
from dealer_mcp.config import AnalyticsConfig
from dealer_mcp.tools.analytics import get_vercel_analytics_impl

SECTIONS = ["blog", "inventory", "about", "contact", "financing"]
MODELS = ["911", "roma", "r8", "720s", "m4"]


def make_line(i: int) -> str:
    path = f"/{SECTIONS[i % 5]}/{MODELS[(i // 5) % 5]}-{i}"
    if i % 7 == 0:
        path = f'"{path},quoted ""{i}"""'
    visitors = 1_000 + (i * 37) % 90_000
    total = visitors + (i * 13) % 5_000
    return f'{path},{visitors},"{total:,}"'


def make_csv(records: int) -> str:
    lines = ["item,visitors,total"]
    lines.extend(make_line(i) for i in range(records))
    return "\n".join(lines)


# ── Benchmarks ────────────────────────────────────────────────────────


def bench_parse(records: int) -> tuple[float, float]:
    content = make_csv(records)
    start = time.perf_counter()
    rows = parse_rows(content)
    elapsed = time.perf_counter() - start
    return elapsed, len(rows) / max(elapsed, 1e-9)


def bench_query(records: int, repeats: int) -> dict[str, float]:
    rows = parse_rows(make_csv(records))

    start = time.perf_counter()
    for i in range(repeats):
        run_query(rows, QueryCriteria(page_contains=SECTIONS[i % 5], limit=50))
    contains_elapsed = time.perf_counter() - start

    start = time.perf_counter()
    for _ in range(repeats):
        run_query(rows, QueryCriteria(min_visitors=50_000, sort_by="total", sort_order="asc"))
    threshold_elapsed = time.perf_counter() - start

    return {
        "contains": contains_elapsed,
        "threshold_sort": threshold_elapsed,
    }


def bench_tool(records: int, repeats: int) -> tuple[float, float]:
    with tempfile.TemporaryDirectory(prefix="dealer-mcp-bench-") as tmp:
        data_dir = Path(tmp)
        (data_dir / "Top Pages - bench.csv").write_text(make_csv(records), encoding="utf-8")
        config = AnalyticsConfig(data_dir=data_dir, default_file=None)

        # Warmup
        get_vercel_analytics_impl(config=config, raw=True)

        start = time.perf_counter()
        for _ in range(repeats):
            get_vercel_analytics_impl(config=config, page_contains="blog", raw=True)
        elapsed = time.perf_counter() - start
    return elapsed, (elapsed / max(repeats, 1)) * 1000


# ── Main ──────────────────────────────────────────────────────────────


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark DealerMCP analytics hot paths.")
    parser.add_argument("--records", type=int, default=50_000)
    parser.add_argument("--repeats", type=int, default=40)
    args = parser.parse_args()

    print("dealer_mcp_hot_path_benchmark")
    print(f"records={args.records}")
    print(f"repeats={args.repeats}")
    print()

    # 1. CSV parsing
    parse_elapsed, parse_rps = bench_parse(args.records)
    print(f"parse_rows_seconds={parse_elapsed:.6f}")
    print(f"parse_rows_per_sec={parse_rps:.0f}")
    print()

    # 2. Query pipeline over pre-parsed rows
    query = bench_query(args.records, args.repeats)
    print(f"query_contains_seconds={query['contains']:.6f}")
    print(f"query_threshold_sort_seconds={query['threshold_sort']:.6f}")
    print()

    # 3. Full tool call (directory listing + read + parse + query, raw mode)
    tool_elapsed, tool_avg_ms = bench_tool(args.records, args.repeats)
    print(f"tool_total_seconds={tool_elapsed:.6f}")
    print(f"tool_avg_ms={tool_avg_ms:.4f}")


if __name__ == "__main__":
    main()
