from hashring.core.collision import CollisionPolicy
from hashring.core.consistent_hash import ConsistentHash
from hashring.core.errors import (
    ConfigurationError,
    EmptyRingError,
    HashCollisionError,
    RingError,
    UnknownHashAlgorithmError,
)
from hashring.core.hash_algorithms import (
    KETAMA_HASH,
    Crc32Hash,
    Fnv1aHash32,
    Fnv1aHash64,
    Fnv1Hash32,
    Fnv1Hash64,
    HashAlgorithm,
    KetamaHash,
    available_algorithms,
    get_hash_algorithm,
    register_hash_algorithm,
)
from hashring.core.identity import Identifiable, identity_of, key_to_bytes

__all__ = [
    "CollisionPolicy",
    "ConsistentHash",
    "ConfigurationError",
    "EmptyRingError",
    "HashCollisionError",
    "RingError",
    "UnknownHashAlgorithmError",
    "KETAMA_HASH",
    "Crc32Hash",
    "Fnv1Hash32",
    "Fnv1aHash32",
    "Fnv1Hash64",
    "Fnv1aHash64",
    "HashAlgorithm",
    "KetamaHash",
    "available_algorithms",
    "get_hash_algorithm",
    "register_hash_algorithm",
    "Identifiable",
    "identity_of",
    "key_to_bytes",
]
