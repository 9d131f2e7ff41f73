from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import perf_counter
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, start_http_server

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class Metrics:
    ring_entries: Gauge = field(
        default_factory=lambda: Gauge(
            "hashring_entries",
            "Number of virtual replica entries on the ring",
            ["ring"],
        )
    )
    ring_nodes: Gauge = field(
        default_factory=lambda: Gauge(
            "hashring_nodes",
            "Number of physical nodes on the ring",
            ["ring"],
        )
    )
    collisions: Counter = field(
        default_factory=lambda: Counter(
            "hashring_collisions_total",
            "Virtual replicas that landed on a position owned by another node",
            ["ring", "policy"],
        )
    )
    lookups: Counter = field(
        default_factory=lambda: Counter(
            "hashring_lookups_total",
            "Total key lookups",
            ["ring", "result"],
        )
    )
    lookup_latency: Histogram = field(
        default_factory=lambda: Histogram(
            "hashring_lookup_latency_seconds",
            "Key lookup latency in seconds",
            ["ring"],
            buckets=(0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01),
        )
    )


class MetricsCollector:
    _instance: MetricsCollector | None = None
    _metrics: Metrics | None = None
    _started: bool = False
    _lock = Lock()

    def __new__(cls) -> MetricsCollector:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._metrics = Metrics()
                    cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def metrics(self) -> Metrics:
        if self._metrics is None:
            self._metrics = Metrics()
        return self._metrics

    def start_server(self, port: int = 9090) -> None:
        if not self._started:
            start_http_server(port)
            self._started = True

    def update_ring(self, ring: str, entries: int, nodes: int) -> None:
        self.metrics.ring_entries.labels(ring=ring).set(entries)
        self.metrics.ring_nodes.labels(ring=ring).set(nodes)

    def record_collision(self, ring: str, policy: str) -> None:
        self.metrics.collisions.labels(ring=ring, policy=policy).inc()

    def record_lookup(self, ring: str, result: str, latency: float) -> None:
        self.metrics.lookups.labels(ring=ring, result=result).inc()
        self.metrics.lookup_latency.labels(ring=ring).observe(latency)


class Timer:
    """Reports the wall time of a `with` block to `callback`, even on error."""

    def __init__(self, callback: Callable[[float], None]) -> None:
        self._start: float = 0.0
        self._callback = callback

    def __enter__(self) -> Timer:
        self._start = perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        self._callback(perf_counter() - self._start)
