from __future__ import annotations

from bisect import bisect_left, insort
from threading import RLock
from typing import TYPE_CHECKING, Generic, TypeVar

from loguru import logger

from hashring.core.collision import CollisionPolicy
from hashring.core.errors import EmptyRingError, HashCollisionError
from hashring.core.hash_algorithms import KETAMA_HASH, get_hash_algorithm
from hashring.core.identity import identity_of, key_to_bytes
from hashring.utils.config import validate_replica_count
from hashring.utils.metrics import MetricsCollector, Timer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from hashring.core.hash_algorithms import HashAlgorithm
    from hashring.utils.config import RingConfig

T = TypeVar("T")


class ConsistentHash(Generic[T]):
    """Consistent-hashing ring with virtual replicas.

    Each node occupies ``replica_count`` positions, ``hash(f"{identity}-{i}")``.
    A key belongs to the first position clockwise from ``hash(key)``, wrapping
    past the largest position back to the smallest.

    Every public method holds the ring's lock, so membership changes and
    lookups may run from several threads. A node's identity must not change
    while it is on the ring, otherwise ``remove_node`` cannot find its
    replicas.
    """

    def __init__(
        self,
        replica_count: int,
        hash_algorithm: HashAlgorithm | str | None = None,
        nodes: Iterable[T] = (),
        identity: Callable[[T], str] | None = None,
        collision_policy: CollisionPolicy | str = CollisionPolicy.KEEP_LAST,
        name: str = "default",
    ) -> None:
        self._replica_count = validate_replica_count(replica_count)
        if hash_algorithm is None:
            hash_algorithm = KETAMA_HASH
        elif isinstance(hash_algorithm, str):
            hash_algorithm = get_hash_algorithm(hash_algorithm)
        self._hash_algorithm = hash_algorithm
        self._identity = identity
        self._collision_policy = CollisionPolicy.parse(collision_policy)
        self._name = name
        self._ring: dict[int, str] = {}
        self._sorted_keys: list[int] = []
        self._nodes: dict[str, T] = {}
        self._lock = RLock()
        self._metrics = MetricsCollector()

        for node in nodes:
            self.add_node(node)
        self._publish_size()

    @classmethod
    def from_config(
        cls,
        config: RingConfig,
        nodes: Iterable[T] = (),
        identity: Callable[[T], str] | None = None,
    ) -> ConsistentHash[T]:
        return cls(
            replica_count=config.replica_count,
            hash_algorithm=config.hash_algorithm,
            nodes=nodes,
            identity=identity,
            collision_policy=config.collision_policy,
            name=config.name,
        )

    @property
    def replica_count(self) -> int:
        return self._replica_count

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return self._hash_algorithm

    @property
    def collision_policy(self) -> CollisionPolicy:
        return self._collision_policy

    @property
    def name(self) -> str:
        return self._name

    def _identity_of(self, node: T) -> str:
        return identity_of(node, self._identity)

    def _positions(self, node_id: str) -> list[int]:
        return [
            self._hash_algorithm.hash(f"{node_id}-{i}")
            for i in range(self._replica_count)
        ]

    def _publish_size(self) -> None:
        self._metrics.update_ring(self._name, len(self._ring), len(self._nodes))

    def replica_positions(self, node: T) -> list[int]:
        return self._positions(self._identity_of(node))

    def add_node(self, node: T) -> None:
        node_id = self._identity_of(node)
        positions = self._positions(node_id)

        with self._lock:
            seen: set[int] = set()
            collisions: list[tuple[int, str]] = []
            for position in positions:
                if position in seen:
                    collisions.append((position, node_id))
                    continue
                seen.add(position)
                owner = self._ring.get(position)
                if owner is not None and owner != node_id:
                    collisions.append((position, owner))
            policy = self._collision_policy
            for position, existing in collisions:
                self._metrics.record_collision(self._name, policy.value)
                logger.warning(
                    f"Ring {self._name}: replica of {node_id} collides with "
                    f"{existing} at {position} ({policy.value})"
                )
            if collisions and policy is CollisionPolicy.REJECT:
                position, existing = collisions[0]
                raise HashCollisionError(position, existing, node_id)

            self._nodes[node_id] = node
            for position in positions:
                owner = self._ring.get(position)
                if owner is None:
                    insort(self._sorted_keys, position)
                elif owner != node_id and policy is CollisionPolicy.KEEP_FIRST:
                    continue
                self._ring[position] = node_id
            self._publish_size()
            entries = len(self._ring)

        logger.debug(f"Ring {self._name}: added {node_id}, {entries} entries")

    def remove_node(self, node: T) -> None:
        node_id = self._identity_of(node)
        positions = self._positions(node_id)

        with self._lock:
            removed = 0
            for position in positions:
                if self._ring.get(position) != node_id:
                    continue
                del self._ring[position]
                del self._sorted_keys[bisect_left(self._sorted_keys, position)]
                removed += 1
            known = self._nodes.pop(node_id, None) is not None
            self._publish_size()
            entries = len(self._ring)

        if known or removed:
            logger.debug(
                f"Ring {self._name}: removed {node_id} "
                f"({removed} replicas), {entries} entries"
            )

    def _lookup(self, position: int) -> T | None:
        if not self._sorted_keys:
            return None
        index = bisect_left(self._sorted_keys, position)
        if index == len(self._sorted_keys):
            index = 0
        return self._nodes[self._ring[self._sorted_keys[index]]]

    def get_node(self, key: object) -> T | None:
        """Return the node owning ``key``, or None when the ring is empty."""
        result = "error"

        def record(elapsed: float) -> None:
            self._metrics.record_lookup(self._name, result, elapsed)

        with Timer(record):
            position = self._hash_algorithm.hash(key_to_bytes(key))
            with self._lock:
                node = self._lookup(position)
            result = "empty" if node is None else "hit"
        return node

    def __getitem__(self, key: object) -> T:
        node = self.get_node(key)
        if node is None:
            raise EmptyRingError(f"Ring {self._name} has no nodes")
        return node

    def get_all_nodes(self) -> list[T]:
        with self._lock:
            return list(self._nodes.values())

    @property
    def node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    @property
    def entry_count(self) -> int:
        with self._lock:
            return len(self._ring)

    def __len__(self) -> int:
        return self.entry_count

    def __contains__(self, node: object) -> bool:
        try:
            node_id = identity_of(node, self._identity)
        except TypeError:
            return False
        with self._lock:
            return node_id in self._nodes

    def entries(self) -> list[tuple[int, T]]:
        with self._lock:
            return [(h, self._nodes[self._ring[h]]) for h in self._sorted_keys]

    def describe(self) -> str:
        with self._lock:
            body = ", ".join(f"{h}={self._ring[h]}" for h in self._sorted_keys)
        return f"{{{body}}}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"replica_count={self._replica_count}, "
            f"hash_algorithm={self._hash_algorithm.name!r}, "
            f"nodes={self.node_count}, entries={self.entry_count})"
        )
