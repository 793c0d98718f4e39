"""Search latency metrics and development-time reporting."""

import json
import time
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from loguru import logger

from .models import SourceKind


@dataclass
class LatencyHistogram:
    """Track latency distribution with percentiles."""
    name: str
    buckets: List[float] = field(default_factory=lambda: [
        1, 5, 10, 25, 50, 100, 200, 400, 800, 1600  # milliseconds
    ])
    counts: Dict[float, int] = field(default_factory=dict)
    overflow_count: int = 0
    max_ms: float = 0
    total_count: int = 0
    sum_ms: float = 0

    def __post_init__(self):
        for bucket in self.buckets:
            self.counts[bucket] = 0

    def record(self, latency_ms: float) -> None:
        """Record a latency measurement."""
        self.total_count += 1
        self.sum_ms += latency_ms
        self.max_ms = max(self.max_ms, latency_ms)

        for bucket in self.buckets:
            if latency_ms <= bucket:
                self.counts[bucket] += 1
                break
        else:
            self.overflow_count += 1

    def get_percentile(self, percentile: float) -> float:
        """
        Get approximate percentile value (the upper bound of its bucket).

        Percentiles landing past the largest bucket report the slowest
        recorded latency.
        """
        if self.total_count == 0:
            return 0

        target_count = self.total_count * (percentile / 100)
        cumulative = 0

        for bucket in self.buckets:
            cumulative += self.counts[bucket]
            if cumulative >= target_count:
                return bucket

        return self.max_ms

    def get_mean(self) -> float:
        if self.total_count == 0:
            return 0
        return self.sum_ms / self.total_count

    def to_dict(self) -> Dict[str, object]:
        """Export metrics as dictionary."""
        if self.total_count == 0:
            return {
                "name": self.name,
                "count": 0,
                "mean": 0,
                "p50": 0,
                "p95": 0,
                "p99": 0
            }

        return {
            "name": self.name,
            "count": self.total_count,
            "mean": round(self.get_mean(), 1),
            "p50": self.get_percentile(50),
            "p95": self.get_percentile(95),
            "p99": self.get_percentile(99),
            "overflow": self.overflow_count,
            "buckets": {
                f"le_{bucket}": self.counts[bucket]
                for bucket in self.buckets
            }
        }


class SearchMetrics:
    """
    Collects per-call and per-provider search latencies.

    Passed explicitly into compute_search_results(); nothing is recorded
    unless a collector is supplied.
    """

    def __init__(self, max_elapsed_ms: float = 1600):
        self.max_elapsed_ms = max_elapsed_ms
        self.histograms: Dict[str, LatencyHistogram] = {
            "search.total": LatencyHistogram("search.total"),
        }
        for source_kind in SourceKind:
            name = f"search.{source_kind.value}"
            self.histograms[name] = LatencyHistogram(name)
        self.counters = defaultdict(int)

    def record_provider(self, source_kind: SourceKind, latency_ms: float, raw_count: int) -> None:
        self.histograms[f"search.{source_kind.value}"].record(latency_ms)
        self.counters[f"{source_kind.value}.raw_results"] += raw_count

    def record_search(self, latency_ms: float, result_count: int) -> None:
        self.histograms["search.total"].record(latency_ms)
        self.counters["searches"] += 1
        self.counters["results"] += result_count
        if result_count == 0:
            self.counters["empty_searches"] += 1

    def check_slos(self) -> Dict[str, bool]:
        """Name -> passing status for the search latency budget."""
        slos = {}
        total = self.histograms["search.total"]
        if total.total_count > 0:
            slos["search_p95_within_budget"] = total.get_percentile(95) <= self.max_elapsed_ms
        return slos

    def export_metrics(self, format: str = "json") -> str:
        """Export all metrics in specified format."""
        if format == "json":
            data = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "latencies": {
                    name: hist.to_dict()
                    for name, hist in self.histograms.items()
                },
                "counters": dict(self.counters),
                "slos": self.check_slos()
            }
            return json.dumps(data, indent=2, default=str)

        elif format == "prometheus":
            lines = []
            for name, hist in self.histograms.items():
                metric_name = f"omnisearch_{name.replace('.', '_')}_latency"
                lines.append(f"# HELP {metric_name}_ms Search latency in milliseconds")
                lines.append(f"# TYPE {metric_name}_ms histogram")

                cumulative = 0
                for bucket in hist.buckets:
                    cumulative += hist.counts[bucket]
                    lines.append(f'{metric_name}_ms_bucket{{le="{bucket}"}} {cumulative}')
                lines.append(f'{metric_name}_ms_bucket{{le="+Inf"}} {hist.total_count}')
                lines.append(f'{metric_name}_ms_sum {hist.sum_ms}')
                lines.append(f'{metric_name}_ms_count {hist.total_count}')

            for name, value in self.counters.items():
                metric_name = f"omnisearch_{name.replace('.', '_')}_total"
                lines.append(f"# TYPE {metric_name} counter")
                lines.append(f"{metric_name} {value}")

            return "\n".join(lines)

        else:
            raise ValueError(f"Unknown format: {format}")

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        for hist in self.histograms.values():
            hist.counts = {bucket: 0 for bucket in hist.buckets}
            hist.overflow_count = 0
            hist.max_ms = 0
            hist.total_count = 0
            hist.sum_ms = 0
        self.counters.clear()


class LatencyTimer:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self):
        self.start_time: Optional[float] = None
        self.elapsed_ms: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000
        return False


def report_search_metrics(query: str, elapsed_ms: float, result_count: int) -> None:
    """Development-only observability signal; never affects results."""
    if not query.strip():
        return
    logger.debug(
        "[search] {}",
        {"q": query, "ms": round(elapsed_ms, 2), "count": result_count}
    )
