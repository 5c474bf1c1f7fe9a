"""Pytest configuration and fixtures for dice-roller plugin tests."""

import json
from itertools import cycle
from unittest.mock import AsyncMock, MagicMock

import pytest

from dicebox import DiceRoller


@pytest.fixture
def mock_nats():
    """Create mock NATS client for testing."""
    nats = AsyncMock()
    nats.subscribe = AsyncMock(return_value=MagicMock())
    nats.publish = AsyncMock()
    return nats


@pytest.fixture
def plugin_config():
    """Default plugin configuration."""
    return {
        "max_dice": 100,
        "max_sides": 1000,
        "emit_events": True,
        "show_emoji": True,
    }


@pytest.fixture
def cycling_roller():
    """Factory for rollers that replay draws in a loop."""

    def make(*values: int) -> DiceRoller:
        draws = cycle(values)
        return DiceRoller(source=lambda faces: next(draws))

    return make


@pytest.fixture
def make_msg():
    """Factory for mock NATS request messages."""

    def make(data, reply: str = "test.reply"):
        msg = MagicMock()
        msg.data = data if isinstance(data, bytes) else json.dumps(data).encode()
        msg.reply = reply
        msg.respond = AsyncMock()
        return msg

    return make
