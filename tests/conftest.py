"""Test configuration and fixtures for octacore tests."""

import io

import pytest
import jax.numpy as jnp
from octacore import create_state
from octacore.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    """Logger writing to an in-memory stream at DEBUG level."""
    return ConsoleLogger("Test", log_level="DEBUG", use_colors=False, show_timestamps=False, stream=log_stream)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Assemble instruction words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
