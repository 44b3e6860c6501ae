"""Main execution engine: evaluator dispatch and the frame driver."""

from typing import NamedTuple, Optional

import jax.numpy as jnp
from tqdm import tqdm

from octacore.constants import ADDRESS_MASK, DEFAULT_FPS, INSTRUCTION_FREQUENCY
from octacore.decode import (
    decode, describe, ClearScreen, Return, Jump, Call, SkipIfEqual, SkipIfNotEqual, Set, Add,
    Or, And, Xor, Subtract, ShiftRight, SubtractReversed, ShiftLeft, SetIndex, Random, Draw,
    SkipIfKey, SkipIfNotKey, GetDelayTimer, WaitForKey, SetDelayTimer, SetSoundTimer,
    AddToIndex, FontCharacter, StoreBCD, StoreRegisters, LoadRegisters, Unrecognized,
)
from octacore.errors import AddressOverflow, EmulatorError
from octacore.logging import ConsoleLogger, get_logger
from octacore.refs import DelayTimer, ProgramCounter, SoundTimer, assign, look, peek
from octacore.state import EmulatorState
from octacore.instructions.system import execute_clear_screen, execute_return, execute_unrecognized
from octacore.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal, execute_skip_if_not_equal,
    execute_skip_if_key, execute_skip_if_not_key,
)
from octacore.instructions.alu import (
    execute_or, execute_and, execute_xor, execute_sub_xy, execute_shift_right,
    execute_sub_yx, execute_shift_left,
)
from octacore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octacore.instructions.display import execute_display
from octacore.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)


HANDLERS = {
    ClearScreen: execute_clear_screen,
    Return: execute_return,
    Jump: execute_jump,
    Call: execute_call,
    SkipIfEqual: execute_skip_if_equal,
    SkipIfNotEqual: execute_skip_if_not_equal,
    Set: execute_set,
    Add: execute_add,
    Or: execute_or,
    And: execute_and,
    Xor: execute_xor,
    Subtract: execute_sub_xy,
    ShiftRight: execute_shift_right,
    SubtractReversed: execute_sub_yx,
    ShiftLeft: execute_shift_left,
    SetIndex: execute_set_index,
    Random: execute_random,
    Draw: execute_display,
    SkipIfKey: execute_skip_if_key,
    SkipIfNotKey: execute_skip_if_not_key,
    GetDelayTimer: execute_get_delay_timer,
    WaitForKey: execute_wait_for_key,
    SetDelayTimer: execute_set_delay_timer,
    SetSoundTimer: execute_set_sound_timer,
    AddToIndex: execute_add_to_index,
    FontCharacter: execute_font_character,
    StoreBCD: execute_bcd_conversion,
    StoreRegisters: execute_store_registers,
    LoadRegisters: execute_load_registers,
    Unrecognized: execute_unrecognized,
}


class FrameResult(NamedTuple):
    """Outcome of driving one or more frames.

    ``state`` is the state after the last instruction that completed. When
    ``error`` is set, dispatch stopped at the faulting instruction and
    ``state.pc`` still points at it.
    """
    state: EmulatorState
    executed: int
    error: Optional[EmulatorError] = None


def evaluate(state: EmulatorState, instruction) -> EmulatorState:
    """Apply one decoded instruction to the state."""
    return HANDLERS[type(instruction)](state, instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single instruction word without fetching it."""
    return evaluate(state, decode(instruction))


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a big-endian word."""
    return (high << 8) | low


def _word_at(state: EmulatorState, address: int) -> int:
    high, low = state.memory[address:address + 2].tolist()
    return _pack_u16(high, low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance the program counter."""
    pc = look(state, ProgramCounter())
    if pc + 1 > ADDRESS_MASK:
        raise AddressOverflow(pc + 1)
    return assign(state, ProgramCounter(), pc + 2), _word_at(state, pc)


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-evaluate cycle."""
    state, instruction = fetch(state)
    return evaluate(state, decode(instruction))


def instructions_per_frame(hz: int, instruction_frequency: int = INSTRUCTION_FREQUENCY) -> int:
    """Number of cycles run in one frame at ``hz`` frames per second."""
    if hz <= 0:
        raise ValueError(f"Frame rate must be positive, got {hz}")
    return instruction_frequency // hz


def decrement_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero."""
    for timer in (DelayTimer(), SoundTimer()):
        value = peek(state, timer)
        state = assign(state, timer, jnp.where(value > 0, value - 1, value))
    return state


def advance_frame(
    state: EmulatorState,
    hz: int = DEFAULT_FPS,
    instruction_frequency: int = INSTRUCTION_FREQUENCY,
    logger: Optional[ConsoleLogger] = None,
) -> FrameResult:
    """Run one host frame: timer decay, then ``instruction_frequency // hz`` cycles.

    An ``EmulatorError`` raised by a cycle ends the frame early. The faulting
    cycle leaves no trace on the returned state and the error is reported in
    the result instead of being raised.
    """
    logger = logger or get_logger()
    cycles = instructions_per_frame(hz, instruction_frequency)
    state = decrement_timers(state)

    for executed in range(cycles):
        try:
            state = step(state)
        except EmulatorError as error:
            pc = look(state, ProgramCounter())
            logger.warning(f"Halted frame at PC 0x{pc:03X} after {executed} instructions: {error}")
            if logger.is_enabled_for("DEBUG") and pc + 1 <= ADDRESS_MASK:
                word = _word_at(state, pc)
                logger.debug(f"Faulting word 0x{word:04X} ({describe(decode(word))})")
            return FrameResult(state, executed, error)

    if logger.is_enabled_for("DEBUG"):
        logger.debug(
            f"Frame done: {cycles} instructions, PC 0x{look(state, ProgramCounter()):03X}, "
            f"DT {look(state, DelayTimer())}, ST {look(state, SoundTimer())}"
        )
    return FrameResult(state, cycles)


def run_frames(
    state: EmulatorState,
    num_frames: int,
    hz: int = DEFAULT_FPS,
    instruction_frequency: int = INSTRUCTION_FREQUENCY,
    logger: Optional[ConsoleLogger] = None,
    show_progress: bool = False,
) -> FrameResult:
    """Drive ``num_frames`` frames back to back without host input.

    Stops after the first frame that reports an error.
    """
    logger = logger or get_logger()
    total = 0
    with tqdm(total=num_frames, desc="Frames", unit="frame", disable=not show_progress) as progress:
        for frame in range(num_frames):
            state, executed, error = advance_frame(state, hz, instruction_frequency, logger)
            total += executed
            progress.update(1)
            if error is not None:
                logger.error(f"Stopped at frame {frame + 1}/{num_frames}: {error}")
                return FrameResult(state, total, error)

    logger.info(f"Ran {num_frames} frames ({total} instructions) at {hz} Hz")
    return FrameResult(state, total)
