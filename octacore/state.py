"""Machine state structures."""

from typing import Iterable, Sequence, Union

import jax
import jax.numpy as jnp
from flax.struct import dataclass, field, PyTreeNode

from octacore.constants import (
    MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE, FONT_START, FONT_DATA,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)
from octacore.errors import ConstructionError


@dataclass(frozen=True)
class StackState:
    """Call stack holding return addresses."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Complete machine state for one session.

    The display is indexed ``[x, y]``: 64 columns of 32 rows. ``I`` is wider
    than an address so that index arithmetic past 0xFFF stays visible.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint32))


def create_state(
    program: Union[bytes, Sequence[int]] = b"",
    seed: int = 0,
    font: Union[bytes, Sequence[int], jnp.ndarray] = FONT_DATA,
) -> EmulatorState:
    """Create a machine with the font at 0x000 and the program at 0x200.

    Raises:
        ConstructionError: if the program or the font overflows its region.
    """
    program = bytes(program)
    if len(program) > MAX_PROGRAM_SIZE:
        raise ConstructionError(
            f"program is {len(program)} bytes, at most {MAX_PROGRAM_SIZE} fit after 0x{PROGRAM_START:03X}"
        )

    font = jnp.asarray(list(font) if isinstance(font, (bytes, bytearray)) else font, dtype=jnp.uint8)
    if FONT_START + font.shape[0] > PROGRAM_START:
        raise ConstructionError(
            f"font is {font.shape[0]} bytes, at most {PROGRAM_START - FONT_START} fit before the program"
        )

    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + font.shape[0]].set(font)
    memory = memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)

    return EmulatorState(rng=jax.random.PRNGKey(seed), memory=memory)


def set_keys(state: EmulatorState, pressed: Iterable[int]) -> EmulatorState:
    """Replace the keypad so that exactly the given keys are held down."""
    keypad = [False] * NUM_KEYS
    for key in pressed:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key index {key} is outside 0-{NUM_KEYS - 1}")
        keypad[key] = True
    return state.replace(keypad=jnp.array(keypad, dtype=jnp.bool_))
