"""Tests for system instructions (0xxx)."""

import pytest
import jax.numpy as jnp
from octacore import execute, STACK_SIZE
from octacore.errors import StackOverflow, StackUnderflow, UnrecognizedInstruction


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(1))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0


def test_clear_screen_fully_lit(fresh_state):
    """00E0 on an all-lit display."""
    state = fresh_state.replace(display=jnp.ones_like(fresh_state.display))

    state = execute(state, 0x00E0)

    assert not jnp.any(state.display)
    assert state.display.shape == (64, 32)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_return_in_order(fresh_state):
    """Returns unwind the stack in LIFO order."""
    state = execute(fresh_state, 0x2300)
    state = execute(state, 0x2400)
    assert state.stack.pointer == 2

    state = execute(state, 0x00EE)
    assert state.pc == 0x300
    state = execute(state, 0x00EE)
    assert state.pc == 0x200


def test_return_with_empty_stack(fresh_state):
    """00EE on an empty stack raises."""
    with pytest.raises(StackUnderflow):
        execute(fresh_state, 0x00EE)


def test_call_with_full_stack(fresh_state):
    """2NNN past the stack capacity raises."""
    state = fresh_state
    for _ in range(STACK_SIZE):
        state = execute(state, 0x2300)
    assert state.stack.pointer == STACK_SIZE

    with pytest.raises(StackOverflow):
        execute(state, 0x2300)


@pytest.mark.parametrize("word", [0x0000, 0x0123, 0x00E1, 0x00FF])
def test_machine_code_routine_rejected(fresh_state, word):
    """0NNN other than 00E0/00EE is not supported."""
    with pytest.raises(UnrecognizedInstruction) as excinfo:
        execute(fresh_state, word)
    assert excinfo.value.word == word
