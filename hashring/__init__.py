from hashring.core import (
    KETAMA_HASH,
    CollisionPolicy,
    ConfigurationError,
    ConsistentHash,
    EmptyRingError,
    HashAlgorithm,
    HashCollisionError,
    Identifiable,
    RingError,
    UnknownHashAlgorithmError,
    available_algorithms,
    get_hash_algorithm,
    register_hash_algorithm,
)
from hashring.utils import Config, RingConfig

__version__ = "0.1.0"

__all__ = [
    "KETAMA_HASH",
    "CollisionPolicy",
    "ConfigurationError",
    "ConsistentHash",
    "EmptyRingError",
    "HashAlgorithm",
    "HashCollisionError",
    "Identifiable",
    "RingError",
    "UnknownHashAlgorithmError",
    "available_algorithms",
    "get_hash_algorithm",
    "register_hash_algorithm",
    "Config",
    "RingConfig",
]
