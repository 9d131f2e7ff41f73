from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from time import sleep

from prometheus_client import REGISTRY
from pytest import MonkeyPatch, raises
from utils.testing import ScriptedHash

from hashring.core.collision import CollisionPolicy
from hashring.core.consistent_hash import ConsistentHash
from hashring.core.errors import EmptyRingError
from hashring.core.hash_algorithms import Fnv1aHash64
from hashring.utils.metrics import MetricsCollector, Timer


def _sample(name: str, **labels: str) -> float:
    value = REGISTRY.get_sample_value(name, labels)
    return value if value is not None else 0.0


class TestMetricsCollector:
    def test_singleton(self) -> None:
        assert MetricsCollector() is MetricsCollector()

    def test_first_construction_is_guarded(self, monkeypatch: MonkeyPatch) -> None:
        created: list[object] = []

        def build() -> object:
            sleep(0.01)
            created.append(object())
            return created[-1]

        monkeypatch.setattr(MetricsCollector, "_instance", None)
        monkeypatch.setattr(MetricsCollector, "_metrics", None)
        monkeypatch.setattr("hashring.utils.metrics.Metrics", build)

        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(lambda _: MetricsCollector(), range(8)))

        assert len(created) == 1
        assert all(instance is instances[0] for instance in instances)

    def test_ring_size_gauges(self, ring_name: str) -> None:
        ring: ConsistentHash[str] = ConsistentHash(
            replica_count=10, hash_algorithm=Fnv1aHash64(), name=ring_name
        )
        assert _sample("hashring_entries", ring=ring_name) == 0

        ring.add_node("a")
        ring.add_node("b")
        assert _sample("hashring_entries", ring=ring_name) == 20
        assert _sample("hashring_nodes", ring=ring_name) == 2

        ring.remove_node("a")
        assert _sample("hashring_entries", ring=ring_name) == 10
        assert _sample("hashring_nodes", ring=ring_name) == 1

    def test_lookup_counters(self, ring_name: str) -> None:
        ring: ConsistentHash[str] = ConsistentHash(replica_count=10, name=ring_name)
        ring.get_node("key")
        ring.add_node("a")
        ring.get_node("key")
        ring.get_node("other")

        assert _sample("hashring_lookups_total", ring=ring_name, result="empty") == 1
        assert _sample("hashring_lookups_total", ring=ring_name, result="hit") == 2
        assert _sample("hashring_lookup_latency_seconds_count", ring=ring_name) == 3

    def test_getitem_lookups_are_counted(self, ring_name: str) -> None:
        ring: ConsistentHash[str] = ConsistentHash(
            replica_count=10, nodes=["a"], name=ring_name
        )
        assert ring["k"] == "a"
        with raises(EmptyRingError):
            ConsistentHash(replica_count=1, name=f"{ring_name}-empty")["k"]

        assert _sample("hashring_lookups_total", ring=ring_name, result="hit") == 1
        assert _sample("hashring_lookup_latency_seconds_count", ring=ring_name) == 1
        assert (
            _sample("hashring_lookups_total", ring=f"{ring_name}-empty", result="empty")
            == 1
        )

    def test_failed_lookup_is_counted(self, ring_name: str) -> None:
        ring = ConsistentHash(
            replica_count=1,
            hash_algorithm=ScriptedHash(positions={"A-0": 7}),
            nodes=["A"],
            name=ring_name,
        )
        with raises(KeyError):
            ring.get_node("unmapped")

        assert _sample("hashring_lookups_total", ring=ring_name, result="error") == 1

    def test_collision_counter(self, ring_name: str) -> None:
        ring = ConsistentHash(
            replica_count=1,
            hash_algorithm=ScriptedHash(positions={"A-0": 7, "B-0": 7}),
            collision_policy=CollisionPolicy.KEEP_FIRST,
            name=ring_name,
        )
        ring.add_node("A")
        ring.add_node("B")

        assert (
            _sample("hashring_collisions_total", ring=ring_name, policy="keep_first")
            == 1
        )


class TestTimer:
    def test_callback_receives_elapsed(self) -> None:
        recorded: list[float] = []
        with Timer(recorded.append):
            pass
        assert len(recorded) == 1
        assert recorded[0] >= 0

    def test_callback_runs_when_block_raises(self) -> None:
        recorded: list[float] = []
        with raises(RuntimeError), Timer(recorded.append):
            raise RuntimeError("boom")
        assert len(recorded) == 1
