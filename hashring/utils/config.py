from __future__ import annotations

from dataclasses import dataclass, field
from os import getenv

from hashring.core.collision import CollisionPolicy
from hashring.core.errors import ConfigurationError
from hashring.core.hash_algorithms import get_hash_algorithm

DEFAULT_REPLICA_COUNT = 160


def validate_replica_count(replica_count: object) -> int:
    if (
        isinstance(replica_count, bool)
        or not isinstance(replica_count, int)
        or replica_count <= 0
    ):
        raise ConfigurationError(
            f"replica_count must be a positive integer, got {replica_count!r}"
        )
    return replica_count


def _int_from_env(name: str, default: int) -> int:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class RingConfig:
    name: str = "default"
    replica_count: int = DEFAULT_REPLICA_COUNT
    hash_algorithm: str = "ketama"
    collision_policy: str = CollisionPolicy.KEEP_LAST.value

    def __post_init__(self) -> None:
        validate_replica_count(self.replica_count)
        get_hash_algorithm(self.hash_algorithm)
        CollisionPolicy.parse(self.collision_policy)


@dataclass(frozen=True, slots=True)
class Config:
    ring: RingConfig = field(default_factory=RingConfig)
    nodes: tuple[str, ...] = ()
    metrics_port: int = 0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 <= self.metrics_port <= 65535:
            raise ConfigurationError(
                f"metrics_port must be between 0 and 65535, got {self.metrics_port}"
            )

    @classmethod
    def from_env(cls) -> Config:
        ring = RingConfig(
            name=getenv("RING_NAME", "default"),
            replica_count=_int_from_env("RING_REPLICAS", DEFAULT_REPLICA_COUNT),
            hash_algorithm=getenv("RING_HASH_ALGORITHM", "ketama"),
            collision_policy=getenv(
                "RING_COLLISION_POLICY", CollisionPolicy.KEEP_LAST.value
            ),
        )

        nodes_str = getenv("RING_NODES", "")
        nodes = tuple(n.strip() for n in nodes_str.split(",") if n.strip())

        return cls(
            ring=ring,
            nodes=nodes,
            metrics_port=_int_from_env("METRICS_PORT", 0),
            log_level=getenv("LOG_LEVEL", "INFO"),
        )
