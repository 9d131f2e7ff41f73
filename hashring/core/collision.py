from __future__ import annotations

from enum import Enum

from hashring.core.errors import ConfigurationError


class CollisionPolicy(Enum):
    """What happens when two different nodes land on the same ring position."""

    KEEP_LAST = "keep_last"
    KEEP_FIRST = "keep_first"
    REJECT = "reject"

    @classmethod
    def parse(cls, value: CollisionPolicy | str) -> CollisionPolicy:
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ConfigurationError(
                f"Unknown collision policy: {value!r}"
            ) from None
