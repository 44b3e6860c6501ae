"""Timer, keypad-wait and index-memory instructions (Fxxx)."""

import jax.numpy as jnp
from octacore.state import EmulatorState
from octacore.constants import ADDRESS_MASK, FONT_START, GLYPH_SIZE
from octacore.decode import (
    AddToIndex, FontCharacter, GetDelayTimer, LoadRegisters, SetDelayTimer,
    SetSoundTimer, StoreBCD, StoreRegisters, WaitForKey,
)
from octacore.refs import (
    FLAG, DelayTimer, Index, ProgramCounter, Register, SoundTimer,
    assign, copy_into, memory_span, peek, subtract_into,
)


def execute_get_delay_timer(state: EmulatorState, instruction: GetDelayTimer) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return copy_into(state, Register(index=instruction.x), DelayTimer())


def execute_set_delay_timer(state: EmulatorState, instruction: SetDelayTimer) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return copy_into(state, DelayTimer(), Register(index=instruction.x))


def execute_set_sound_timer(state: EmulatorState, instruction: SetSoundTimer) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return copy_into(state, SoundTimer(), Register(index=instruction.x))


def execute_add_to_index(state: EmulatorState, instruction: AddToIndex) -> EmulatorState:
    """FX1E - Add VX to I register.

    I keeps the full sum; VF reports whether it went past the last address.
    """
    new_i = peek(state, Index()) + peek(state, Register(index=instruction.x)).astype(jnp.uint32)
    state = assign(state, Index(), new_i)
    return assign(state, FLAG, new_i > ADDRESS_MASK)


def execute_font_character(state: EmulatorState, instruction: FontCharacter) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = peek(state, Register(index=instruction.x)).astype(jnp.uint32) & 0xF
    return assign(state, Index(), FONT_START + digit * GLYPH_SIZE)


def execute_wait_for_key(state: EmulatorState, instruction: WaitForKey) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the program counter is moved back onto this
    instruction, so it runs again on the next cycle.
    """
    if not bool(jnp.any(state.keypad)):
        return subtract_into(state, ProgramCounter(), 2)
    return assign(state, Register(index=instruction.x), jnp.argmax(state.keypad))


def execute_bcd_conversion(state: EmulatorState, instruction: StoreBCD) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    start = memory_span(state, 3)
    value = peek(state, Register(index=instruction.x))
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[start:start + 3].set(digits))


def execute_store_registers(state: EmulatorState, instruction: StoreRegisters) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    start = memory_span(state, count)
    return state.replace(memory=state.memory.at[start:start + count].set(state.V[:count]))


def execute_load_registers(state: EmulatorState, instruction: LoadRegisters) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    start = memory_span(state, count)
    return state.replace(V=state.V.at[:count].set(state.memory[start:start + count]))
