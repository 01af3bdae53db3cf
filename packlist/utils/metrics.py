"""Prometheus metrics for packing-list computations."""

from prometheus_client import Counter, Histogram

packing_list_computations_total = Counter(
    "packing_list_computations_total",
    "Total packing-list computations",
    ["outcome"],
)

packing_list_compute_latency_ms = Histogram(
    "packing_list_compute_latency_ms",
    "Packing-list computation latency in milliseconds",
    buckets=[0.5, 1, 2, 5, 10, 25, 50, 100, 250],
)

packing_list_memo_hits_total = Counter(
    "packing_list_memo_hits_total",
    "Total memoized packing-list lookups served from cache",
)

rule_violations_total = Counter(
    "rule_violations_total",
    "Total rule violations reported by validation",
    ["code"],
)


class PrometheusEngineMetrics:
    """Prometheus-based engine metrics implementation."""

    def record_computation(self, outcome: str, latency_ms: float) -> None:
        """Record one computation and its latency."""
        packing_list_computations_total.labels(outcome=outcome).inc()
        packing_list_compute_latency_ms.observe(latency_ms)

    def inc_memo_hit(self) -> None:
        """Increment memo hit counter."""
        packing_list_memo_hits_total.inc()

    def inc_violation(self, code: str) -> None:
        """Increment violation counter."""
        rule_violations_total.labels(code=code).inc()
