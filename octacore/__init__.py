"""Virtual CPU core for the CHIP-8 fantasy machine."""

from octacore.state import EmulatorState, StackState, create_state, set_keys
from octacore.emulator import (
    FrameResult, evaluate, execute, fetch, step, advance_frame, run_frames,
    decrement_timers, instructions_per_frame,
)
from octacore.decode import decode, describe, split_nibbles
from octacore.errors import (
    EmulatorError, ConstructionError, StackUnderflow, StackOverflow,
    UnrecognizedInstruction, AddressOverflow,
)
from octacore.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "set_keys",
    "FrameResult",
    "evaluate",
    "execute",
    "fetch",
    "step",
    "advance_frame",
    "run_frames",
    "decrement_timers",
    "instructions_per_frame",
    "decode",
    "describe",
    "split_nibbles",
    "EmulatorError",
    "ConstructionError",
    "StackUnderflow",
    "StackOverflow",
    "UnrecognizedInstruction",
    "AddressOverflow",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "INSTRUCTION_FREQUENCY",
]
