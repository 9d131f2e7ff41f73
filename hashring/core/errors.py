from __future__ import annotations


class RingError(Exception):
    pass


class ConfigurationError(RingError, ValueError):
    pass


class UnknownHashAlgorithmError(ConfigurationError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Unknown hash algorithm: {name!r} (available: {', '.join(available)})"
        )
        self.name = name


class HashCollisionError(RingError):
    def __init__(self, position: int, existing: str, incoming: str) -> None:
        super().__init__(
            f"Replica of {incoming!r} collides with {existing!r} at position {position}"
        )
        self.position = position
        self.existing = existing
        self.incoming = incoming


class EmptyRingError(RingError, LookupError):
    pass
