from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from uuid import uuid4

DEFAULT_SEED: int = 1337


@dataclass(slots=True)
class ScriptedHash:
    """Hash algorithm returning fixed positions for known inputs."""

    positions: dict[str, int] = field(default_factory=dict)
    name: str = "scripted"

    def hash(self, data: str | bytes) -> int:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        return self.positions[text]


@dataclass(frozen=True, slots=True)
class Server:
    host: str
    port: int

    @property
    def ring_identity(self) -> str:
        return f"{self.host}:{self.port}"


def unique_ring_name(prefix: str = "test") -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


def random_keys(count: int, seed: int = DEFAULT_SEED) -> list[str]:
    rng = Random(seed)
    return [f"key-{rng.getrandbits(64):016x}" for _ in range(count)]
