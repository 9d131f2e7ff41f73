from __future__ import annotations

from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING

from loguru import logger

from hashring.core.consistent_hash import ConsistentHash
from hashring.core.errors import RingError
from hashring.utils.config import Config
from hashring.utils.logging import configure_logging
from hashring.utils.metrics import MetricsCollector

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    parser = ArgumentParser(
        prog="hashring",
        description="Resolve keys against a ring built from RING_* environment variables.",
    )
    parser.add_argument("keys", nargs="*", help="Keys to resolve")
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the full position -> node mapping",
    )
    return parser.parse_args(argv)


def build_ring(config: Config) -> ConsistentHash[str]:
    return ConsistentHash.from_config(config.ring, nodes=config.nodes)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = Config.from_env()
    except RingError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(config.log_level)

    if config.metrics_port:
        MetricsCollector().start_server(config.metrics_port)

    try:
        ring = build_ring(config)
    except RingError as e:
        logger.error(f"Cannot build ring: {e}")
        return 1
    logger.info(
        f"Ring {ring.name}: {ring.node_count} nodes, {ring.entry_count} entries, "
        f"hash={ring.hash_algorithm.name}"
    )

    if args.describe:
        print(ring.describe())

    for key in args.keys:
        node = ring.get_node(key)
        print(f"{key}\t{node if node is not None else '-'}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
