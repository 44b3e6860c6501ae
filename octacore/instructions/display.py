"""Display operations."""

from functools import partial

import jax
import jax.numpy as jnp
from octacore.state import EmulatorState
from octacore.decode import Draw
from octacore.constants import FLAG_REGISTER, SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH
from octacore.refs import memory_span

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


@partial(jax.jit, static_argnums=6)
def _xor_sprite(display, memory, V, x, y, start, height):
    """XOR ``height`` rows from ``memory[start:]`` onto the display at (VX, VY).

    Returns the new display and whether any lit pixel was turned off.
    """
    rows = jax.lax.dynamic_slice(memory, (start,), (height,))

    col_offset = (xx - V[x].astype(jnp.int32)) % SCREEN_WIDTH
    row_offset = (yy - V[y].astype(jnp.int32)) % SCREEN_HEIGHT
    in_sprite = (col_offset < SPRITE_WIDTH) & (row_offset < height)

    sprite_bytes = rows[jnp.minimum(row_offset, height - 1)].astype(jnp.int32)
    shift = jnp.clip(SPRITE_WIDTH - 1 - col_offset, 0, SPRITE_WIDTH - 1)
    sprite = (((sprite_bytes >> shift) & 1) == 1) & in_sprite

    return display ^ sprite, jnp.any(display & sprite)


def execute_display(state: EmulatorState, instruction: Draw) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Sprite rows are read from I .. I+N-1 and XOR-ed onto the display; pixels
    past an edge wrap around to the opposite edge. VF is 1 if any lit sprite
    pixel landed on a lit display pixel.
    """
    start = memory_span(state, instruction.height)
    if instruction.height == 0:
        return state.replace(V=state.V.at[FLAG_REGISTER].set(0))

    display, collided = _xor_sprite(
        state.display, state.memory, state.V, instruction.x, instruction.y, start, instruction.height,
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(collided.astype(jnp.uint8)),
    )
