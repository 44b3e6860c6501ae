"""System instructions (0x0xxx) and undecodable words."""

import jax.numpy as jnp
from octacore.state import EmulatorState
from octacore.decode import ClearScreen, Return, Unrecognized
from octacore.errors import UnrecognizedInstruction
from octacore.refs import ProgramCounter, Screen, assign
from octacore.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: ClearScreen) -> EmulatorState:
    """00E0 - Clear display."""
    return assign(state, Screen(), jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: Return) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return assign(state.replace(stack=stack), ProgramCounter(), address)


def execute_unrecognized(state: EmulatorState, instruction: Unrecognized) -> EmulatorState:
    """Reject a word that matches no opcode."""
    raise UnrecognizedInstruction(instruction.raw)
