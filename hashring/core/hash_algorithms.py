from __future__ import annotations

from dataclasses import dataclass
from hashlib import md5
from typing import Protocol, runtime_checkable
from zlib import crc32

from hashring.core.errors import UnknownHashAlgorithmError

FNV_32_OFFSET = 0x811C9DC5
FNV_32_PRIME = 0x01000193
FNV_64_OFFSET = 0xCBF29CE484222325
FNV_64_PRIME = 0x100000001B3
MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF


@runtime_checkable
class HashAlgorithm(Protocol):
    """Maps a string or byte string to a non-negative integer ring position.

    Implementations must be deterministic and treat ``str`` input as its UTF-8
    encoding, so ``hash("key") == hash(b"key")``.
    """

    name: str

    def hash(self, data: str | bytes) -> int: ...


def _to_bytes(data: str | bytes) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _fnv1(data: bytes, offset: int, prime: int, mask: int) -> int:
    h = offset
    for byte in data:
        h = (h * prime) & mask
        h ^= byte
    return h


def _fnv1a(data: bytes, offset: int, prime: int, mask: int) -> int:
    h = offset
    for byte in data:
        h ^= byte
        h = (h * prime) & mask
    return h


@dataclass(frozen=True, slots=True)
class KetamaHash:
    """Ketama placement: the first four MD5 digest bytes, little-endian."""

    name: str = "ketama"

    def hash(self, data: str | bytes) -> int:
        digest = md5(_to_bytes(data), usedforsecurity=False).digest()
        return int.from_bytes(digest[:4], "little")


@dataclass(frozen=True, slots=True)
class Crc32Hash:
    name: str = "crc32"

    def hash(self, data: str | bytes) -> int:
        return crc32(_to_bytes(data)) & MASK_32


@dataclass(frozen=True, slots=True)
class Fnv1Hash32:
    name: str = "fnv1_32"

    def hash(self, data: str | bytes) -> int:
        return _fnv1(_to_bytes(data), FNV_32_OFFSET, FNV_32_PRIME, MASK_32)


@dataclass(frozen=True, slots=True)
class Fnv1aHash32:
    name: str = "fnv1a_32"

    def hash(self, data: str | bytes) -> int:
        return _fnv1a(_to_bytes(data), FNV_32_OFFSET, FNV_32_PRIME, MASK_32)


@dataclass(frozen=True, slots=True)
class Fnv1Hash64:
    name: str = "fnv1_64"

    def hash(self, data: str | bytes) -> int:
        return _fnv1(_to_bytes(data), FNV_64_OFFSET, FNV_64_PRIME, MASK_64)


@dataclass(frozen=True, slots=True)
class Fnv1aHash64:
    name: str = "fnv1a_64"

    def hash(self, data: str | bytes) -> int:
        return _fnv1a(_to_bytes(data), FNV_64_OFFSET, FNV_64_PRIME, MASK_64)


KETAMA_HASH = KetamaHash()

_REGISTRY: dict[str, HashAlgorithm] = {}


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def register_hash_algorithm(algorithm: HashAlgorithm) -> None:
    _REGISTRY[_normalize(algorithm.name)] = algorithm


def get_hash_algorithm(name: str) -> HashAlgorithm:
    algorithm = _REGISTRY.get(_normalize(name))
    if algorithm is None:
        raise UnknownHashAlgorithmError(name, available_algorithms())
    return algorithm


def available_algorithms() -> list[str]:
    return sorted(_REGISTRY)


for _algorithm in (
    KETAMA_HASH,
    Crc32Hash(),
    Fnv1Hash32(),
    Fnv1aHash32(),
    Fnv1Hash64(),
    Fnv1aHash64(),
):
    register_hash_algorithm(_algorithm)
