"""Machine constants for the octacore virtual CPU."""

import jax.numpy as jnp

MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0xFFF
FONT_START = 0x000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16

GLYPH_SIZE = 5
SPRITE_WIDTH = 8

# Nominal instruction rate; a frame at `hz` runs INSTRUCTION_FREQUENCY // hz cycles
INSTRUCTION_FREQUENCY = 500
DEFAULT_FPS = 60

FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)

__all__ = [
    "MEMORY_SIZE",
    "ADDRESS_MASK",
    "FONT_START",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "NUM_REGISTERS",
    "NUM_KEYS",
    "FLAG_REGISTER",
    "STACK_SIZE",
    "GLYPH_SIZE",
    "SPRITE_WIDTH",
    "INSTRUCTION_FREQUENCY",
    "DEFAULT_FPS",
    "FONT_DATA",
]
