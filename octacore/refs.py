"""Addressable machine locations.

Instruction handlers are written against a small closed set of location
kinds instead of against state fields by name. ``look`` and ``assign`` pick
the accessor for a location from its type; the combinators below are built
on top of those two.
"""

from typing import Any, Callable, Dict, Tuple

import jax
import jax.numpy as jnp
from chex import dataclass

from octacore.constants import ADDRESS_MASK, FLAG_REGISTER
from octacore.errors import AddressOverflow
from octacore.state import EmulatorState


@dataclass(frozen=True)
class Register:
    """General register V0-VF."""
    index: int


@dataclass(frozen=True)
class MemoryCell:
    """Single byte of memory."""
    address: int


@dataclass(frozen=True)
class Index:
    """Index register I."""


@dataclass(frozen=True)
class ProgramCounter:
    """Program counter."""


@dataclass(frozen=True)
class DelayTimer:
    """Delay timer."""


@dataclass(frozen=True)
class SoundTimer:
    """Sound timer."""


@dataclass(frozen=True)
class Key:
    """State of one keypad key."""
    index: int


@dataclass(frozen=True)
class Pixel:
    """One framebuffer cell."""
    x: int
    y: int


@dataclass(frozen=True)
class Screen:
    """Whole framebuffer."""


FLAG = Register(index=FLAG_REGISTER)


_READERS: Dict[type, Callable[[EmulatorState, Any], Any]] = {
    Register: lambda state, ref: state.V[ref.index],
    MemoryCell: lambda state, ref: state.memory[ref.address],
    Index: lambda state, ref: state.I,
    ProgramCounter: lambda state, ref: state.pc,
    DelayTimer: lambda state, ref: state.delay_timer,
    SoundTimer: lambda state, ref: state.sound_timer,
    Key: lambda state, ref: state.keypad[ref.index],
    Pixel: lambda state, ref: state.display[ref.x, ref.y],
    Screen: lambda state, ref: state.display,
}


def _byte(value) -> jnp.ndarray:
    return (jnp.asarray(value, dtype=jnp.int32) & 0xFF).astype(jnp.uint8)


def _word(value) -> jnp.ndarray:
    return (jnp.asarray(value, dtype=jnp.int32) & 0xFFFF).astype(jnp.uint16)


def _address(value) -> jnp.ndarray:
    return jnp.asarray(value, dtype=jnp.uint32)


def _bit(value) -> jnp.ndarray:
    return jnp.asarray(value, dtype=jnp.bool_)


_WRITERS: Dict[type, Callable[[EmulatorState, Any, Any], EmulatorState]] = {
    Register: lambda state, ref, value: state.replace(V=state.V.at[ref.index].set(_byte(value))),
    MemoryCell: lambda state, ref, value: state.replace(memory=state.memory.at[ref.address].set(_byte(value))),
    Index: lambda state, ref, value: state.replace(I=_address(value)),
    ProgramCounter: lambda state, ref, value: state.replace(pc=_word(value)),
    DelayTimer: lambda state, ref, value: state.replace(delay_timer=_byte(value)),
    SoundTimer: lambda state, ref, value: state.replace(sound_timer=_byte(value)),
    Key: lambda state, ref, value: state.replace(keypad=state.keypad.at[ref.index].set(_bit(value))),
    Pixel: lambda state, ref, value: state.replace(display=state.display.at[ref.x, ref.y].set(_bit(value))),
    Screen: lambda state, ref, value: state.replace(display=jnp.asarray(value, dtype=jnp.bool_)),
}


def peek(state: EmulatorState, ref) -> jnp.ndarray:
    """Read a location as a device array, without a host round trip."""
    return _READERS[type(ref)](state, ref)


def look(state: EmulatorState, ref) -> Any:
    """Read the current value of a location as a Python value.

    ``Screen`` is the exception and stays a ``bool[64, 32]`` array.
    """
    value = peek(state, ref)
    return value if isinstance(ref, Screen) else value.item()


def assign(state: EmulatorState, ref, value) -> EmulatorState:
    """Write a location, truncating to its width.

    ``value`` may be a Python number or a device scalar.
    """
    return _WRITERS[type(ref)](state, ref, value)


def look2(state: EmulatorState, first, second) -> Tuple[Any, Any]:
    """Read two locations at once."""
    return look(state, first), look(state, second)


def copy_into(state: EmulatorState, target, source) -> EmulatorState:
    """Write the value of ``source`` into ``target``."""
    return assign(state, target, peek(state, source))


def add_into(state: EmulatorState, ref, amount: int) -> EmulatorState:
    """Add ``amount`` to a location, wrapping at its width."""
    return assign(state, ref, peek(state, ref).astype(jnp.int32) + amount)


def subtract_into(state: EmulatorState, ref, amount: int) -> EmulatorState:
    """Subtract ``amount`` from a location, wrapping at its width."""
    return assign(state, ref, peek(state, ref).astype(jnp.int32) - amount)


def memory_span(state: EmulatorState, length: int) -> int:
    """First address of the ``length`` bytes starting at I.

    Raises:
        AddressOverflow: if the last byte falls outside memory.
    """
    start = int(state.I)
    if length and start + length - 1 > ADDRESS_MASK:
        raise AddressOverflow(start + length - 1)
    return start


def draw_random_byte(state: EmulatorState) -> Tuple[EmulatorState, jnp.ndarray]:
    """Draw one byte from the state's PRNG key and advance the key."""
    key, subkey = jax.random.split(state.rng)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return state.replace(rng=key), value
