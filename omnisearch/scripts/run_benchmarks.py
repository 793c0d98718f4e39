#!/usr/bin/env python3
"""
Performance benchmarking for omnisearch.
Times global searches over the synthetic baseline corpus and reports percentiles.
"""

import json
import time
from datetime import datetime
from pathlib import Path
from statistics import mean, stdev
from typing import Any, Dict, List

import click
import psutil
from loguru import logger
from tabulate import tabulate

from omnisearch.engine.config import PerformanceConfig, SearchConfig
from omnisearch.engine.metrics import SearchMetrics
from omnisearch.engine.perf import build_synthetic_corpus
from omnisearch.engine.search import compute_search_results


class PerformanceBenchmark:
    """Run search benchmarks in-process against a synthetic corpus."""

    def __init__(self, config: SearchConfig):
        self.config = config
        self.process = psutil.Process()
        self.metrics = SearchMetrics(max_elapsed_ms=config.performance.max_elapsed_ms)

    def benchmark_search(
        self,
        queries: List[str],
        iterations: int = 20,
        warmup: int = 3
    ) -> List[Dict[str, Any]]:
        """Benchmark search latency for each query."""
        rows = []
        for query in queries:
            logger.info(f"Benchmarking '{query}' with {iterations} iterations...")
            params = build_synthetic_corpus(self.config.performance, query=query)

            for _ in range(warmup):
                compute_search_results(params, config=self.config)

            latencies = []
            result_count = 0
            for i in range(iterations):
                start = time.perf_counter()
                results = compute_search_results(params, config=self.config, metrics=self.metrics)
                latencies.append((time.perf_counter() - start) * 1000)
                result_count = len(results)

                if (i + 1) % 10 == 0:
                    logger.debug(f"  Completed {i + 1}/{iterations} searches")

            sorted_latencies = sorted(latencies)
            n = len(sorted_latencies)
            rows.append({
                "query": query,
                "iterations": n,
                "results": result_count,
                "p50": sorted_latencies[int(n * 0.50)],
                "p95": sorted_latencies[min(n - 1, int(n * 0.95))],
                "mean": mean(latencies),
                "max": max(latencies),
                "stdev": stdev(latencies) if n > 1 else 0
            })
        return rows

    def memory_mb(self) -> float:
        return self.process.memory_info().rss / (1024 * 1024)

    def generate_report(self, rows: List[Dict[str, Any]], memory_mb: float) -> str:
        budget = self.config.performance.max_elapsed_ms
        table = tabulate(
            [
                [r["query"], r["iterations"], r["results"],
                 f"{r['p50']:.1f}", f"{r['p95']:.1f}", f"{r['mean']:.1f}", f"{r['max']:.1f}"]
                for r in rows
            ],
            headers=["Query", "Runs", "Results", "p50 ms", "p95 ms", "Mean ms", "Max ms"],
            tablefmt="github"
        )
        slo_pass = all(r["p95"] < budget for r in rows)

        report = [
            f"# Search Benchmark - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "",
            table,
            "",
            f"**Memory:** {memory_mb:.1f} MB",
            f"**Budget:** p95 < {budget} ms: {'PASS' if slo_pass else 'FAIL'}",
        ]
        return "\n".join(report)


@click.command()
@click.option("--query", "-q", "queries", multiple=True, default=["alpha"],
              help="Query to benchmark (repeatable)")
@click.option("--iterations", "-n", default=20, help="Timed iterations per query")
@click.option("--workspaces", type=int, help="Override workspace count")
@click.option("--files", type=int, help="Override files per workspace")
@click.option("--out", type=click.Path(path_type=Path), help="Write markdown report here")
def main(queries, iterations: int, workspaces, files, out):
    """Run performance benchmarks."""
    config = SearchConfig()
    overrides = {}
    if workspaces:
        overrides["workspace_count"] = workspaces
    if files:
        overrides["files_per_workspace"] = files
    if overrides:
        config.performance = PerformanceConfig(**{**config.performance.model_dump(), **overrides})

    benchmark = PerformanceBenchmark(config)
    rows = benchmark.benchmark_search(list(queries), iterations=iterations)
    report = benchmark.generate_report(rows, benchmark.memory_mb())
    click.echo(report)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(report)
        out.with_suffix('.json').write_text(json.dumps(rows, indent=2, default=str))
        logger.success(f"Report written to {out}")

    if all(r["p95"] < config.performance.max_elapsed_ms for r in rows):
        logger.success("Search latency within budget")
    else:
        logger.warning("Search latency over budget")


if __name__ == "__main__":
    main()
