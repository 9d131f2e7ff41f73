from __future__ import annotations

from pathlib import Path
from sys import path
from typing import TYPE_CHECKING

path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from pytest import fixture
from utils.testing import ScriptedHash, unique_ring_name

if TYPE_CHECKING:
    from collections.abc import Generator


@fixture
def ring_name() -> str:
    return unique_ring_name()


@fixture
def scripted_hash() -> ScriptedHash:
    return ScriptedHash(
        positions={
            "A-0": 10,
            "B-0": 20,
            "C-0": 30,
            "k5": 5,
            "k15": 15,
            "k20": 20,
            "k25": 25,
            "k35": 35,
        }
    )


@fixture
def log_messages() -> Generator[list[str], None, None]:
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
