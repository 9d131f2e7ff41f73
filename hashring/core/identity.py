from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class Identifiable(Protocol):
    @property
    def ring_identity(self) -> str: ...


def identity_of(node: Any, identity: Callable[[Any], str] | None = None) -> str:
    """Return the stable string a node's virtual replicas are derived from.

    An explicit ``identity`` callable wins, then ``ring_identity``, then the
    node itself when it is already a string.
    """
    if identity is not None:
        node_id = identity(node)
    elif isinstance(node, Identifiable):
        node_id = node.ring_identity
    elif isinstance(node, str):
        node_id = node
    else:
        raise TypeError(
            f"Cannot derive a ring identity for {type(node).__name__}; "
            "pass identity= or implement ring_identity"
        )
    if not isinstance(node_id, str):
        raise TypeError(f"Ring identity must be str, got {type(node_id).__name__}")
    return node_id


def key_to_bytes(key: object) -> bytes:
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, Identifiable):
        return key.ring_identity.encode("utf-8")
    return str(key).encode("utf-8")
