"""Tests for search latency metrics."""

import json

from omnisearch.engine.metrics import LatencyHistogram, SearchMetrics
from omnisearch.engine.models import SourceKind


class TestLatencyHistogram:

    def test_percentile_within_buckets(self):
        hist = LatencyHistogram("t")
        for latency in (3, 4, 20, 90):
            hist.record(latency)

        assert hist.get_percentile(50) == 5
        assert hist.get_percentile(100) == 100
        assert hist.overflow_count == 0

    def test_latency_past_largest_bucket_is_not_clamped(self):
        """Slow searches land in overflow and report their real latency."""
        hist = LatencyHistogram("t")
        for _ in range(10):
            hist.record(5000)

        assert hist.counts[1600] == 0
        assert hist.overflow_count == 10
        assert hist.get_percentile(95) == 5000


class TestSearchMetrics:

    def test_slow_searches_fail_latency_budget(self):
        metrics = SearchMetrics(max_elapsed_ms=1600)
        for _ in range(10):
            metrics.record_search(5000, 3)

        assert metrics.check_slos() == {"search_p95_within_budget": False}

    def test_fast_searches_pass_latency_budget(self):
        metrics = SearchMetrics(max_elapsed_ms=1600)
        for _ in range(10):
            metrics.record_search(12, 0)

        assert metrics.check_slos() == {"search_p95_within_budget": True}
        assert metrics.counters["empty_searches"] == 10

    def test_prometheus_buckets_exclude_overflow(self):
        metrics = SearchMetrics()
        metrics.record_search(5000, 1)
        metrics.record_search(3, 1)

        lines = metrics.export_metrics("prometheus").splitlines()

        assert 'omnisearch_search_total_latency_ms_bucket{le="1600"} 1' in lines
        assert 'omnisearch_search_total_latency_ms_bucket{le="+Inf"} 2' in lines

    def test_json_export_and_reset(self):
        metrics = SearchMetrics()
        metrics.record_provider(SourceKind.FILES, 2.5, 7)
        metrics.record_search(9000, 4)

        data = json.loads(metrics.export_metrics("json"))
        assert data["counters"]["files.raw_results"] == 7
        assert data["latencies"]["search.total"]["overflow"] == 1
        assert data["timestamp"].endswith("+00:00")

        metrics.reset()
        assert metrics.histograms["search.total"].overflow_count == 0
        assert metrics.histograms["search.total"].max_ms == 0
        assert metrics.check_slos() == {}
