"""Instruction decoding.

``decode`` maps every 16-bit word to a typed instruction value. Words that
match no opcode decode to ``Unrecognized``; the decoder itself never raises.
"""

from typing import Union

from chex import dataclass


# Operands

@dataclass(frozen=True)
class Immediate:
    """8-bit literal taken from the instruction word."""
    value: int


@dataclass(frozen=True)
class RegisterOperand:
    """Current value of another register."""
    index: int


Operand = Union[Immediate, RegisterOperand]


# 0xxx system

@dataclass(frozen=True)
class ClearScreen:
    """00E0 - Clear display."""


@dataclass(frozen=True)
class Return:
    """00EE - Return from subroutine."""


# 1xxx-5xxx, 9xxx control flow

@dataclass(frozen=True)
class Jump:
    """1NNN - Jump to NNN."""
    address: int


@dataclass(frozen=True)
class Call:
    """2NNN - Call subroutine at NNN."""
    address: int


@dataclass(frozen=True)
class SkipIfEqual:
    """3XNN / 5XY0 - Skip next instruction if VX equals the operand."""
    x: int
    operand: Operand


@dataclass(frozen=True)
class SkipIfNotEqual:
    """4XNN / 9XY0 - Skip next instruction if VX differs from the operand."""
    x: int
    operand: Operand


# 6xxx, 7xxx, 8xxx registers and ALU

@dataclass(frozen=True)
class Set:
    """6XNN / 8XY0 - VX = operand."""
    x: int
    operand: Operand


@dataclass(frozen=True)
class Add:
    """7XNN / 8XY4 - VX += operand."""
    x: int
    operand: Operand


@dataclass(frozen=True)
class Or:
    """8XY1"""
    x: int
    y: int


@dataclass(frozen=True)
class And:
    """8XY2"""
    x: int
    y: int


@dataclass(frozen=True)
class Xor:
    """8XY3"""
    x: int
    y: int


@dataclass(frozen=True)
class Subtract:
    """8XY5 - VX = VX - VY."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftRight:
    """8XY6 - VX >>= 1 (VY is ignored)."""
    x: int
    y: int


@dataclass(frozen=True)
class SubtractReversed:
    """8XY7 - VX = VY - VX."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftLeft:
    """8XYE - VX <<= 1 (VY is ignored)."""
    x: int
    y: int


# Axxx-Dxxx

@dataclass(frozen=True)
class SetIndex:
    """ANNN - I = NNN."""
    address: int


@dataclass(frozen=True)
class Random:
    """CXNN - VX = random byte & NN."""
    x: int
    mask: int


@dataclass(frozen=True)
class Draw:
    """DXYN - Draw N-row sprite at (VX, VY)."""
    x: int
    y: int
    height: int


# Exxx keypad

@dataclass(frozen=True)
class SkipIfKey:
    """EX9E"""
    x: int


@dataclass(frozen=True)
class SkipIfNotKey:
    """EXA1"""
    x: int


# Fxxx

@dataclass(frozen=True)
class GetDelayTimer:
    """FX07"""
    x: int


@dataclass(frozen=True)
class WaitForKey:
    """FX0A"""
    x: int


@dataclass(frozen=True)
class SetDelayTimer:
    """FX15"""
    x: int


@dataclass(frozen=True)
class SetSoundTimer:
    """FX18"""
    x: int


@dataclass(frozen=True)
class AddToIndex:
    """FX1E"""
    x: int


@dataclass(frozen=True)
class FontCharacter:
    """FX29"""
    x: int


@dataclass(frozen=True)
class StoreBCD:
    """FX33"""
    x: int


@dataclass(frozen=True)
class StoreRegisters:
    """FX55"""
    x: int


@dataclass(frozen=True)
class LoadRegisters:
    """FX65"""
    x: int


@dataclass(frozen=True)
class Unrecognized:
    """Word that matches no opcode."""
    raw: int


_ALU_OPS = {
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x5: Subtract,
    0x6: ShiftRight,
    0x7: SubtractReversed,
    0xE: ShiftLeft,
}

_KEY_OPS = {
    0x9E: SkipIfKey,
    0xA1: SkipIfNotKey,
}

_MISC_OPS = {
    0x07: GetDelayTimer,
    0x0A: WaitForKey,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddToIndex,
    0x29: FontCharacter,
    0x33: StoreBCD,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def split_nibbles(instruction: int) -> tuple[int, int, int, int]:
    """Split a 16-bit word into four nibbles, most significant first."""
    return (
        (instruction & 0xF000) >> 12,
        (instruction & 0x0F00) >> 8,
        (instruction & 0x00F0) >> 4,
        instruction & 0x000F,
    )


def decode(instruction: int):
    """Decode 16-bit instruction into a typed instruction value."""
    instruction = int(instruction) & 0xFFFF
    opcode, x, y, n = split_nibbles(instruction)
    nn = instruction & 0x00FF
    nnn = instruction & 0x0FFF

    if opcode == 0x0:
        if instruction == 0x00E0:
            return ClearScreen()
        if instruction == 0x00EE:
            return Return()
    elif opcode == 0x1:
        return Jump(address=nnn)
    elif opcode == 0x2:
        return Call(address=nnn)
    elif opcode == 0x3:
        return SkipIfEqual(x=x, operand=Immediate(value=nn))
    elif opcode == 0x4:
        return SkipIfNotEqual(x=x, operand=Immediate(value=nn))
    elif opcode == 0x5:
        if n == 0:
            return SkipIfEqual(x=x, operand=RegisterOperand(index=y))
    elif opcode == 0x6:
        return Set(x=x, operand=Immediate(value=nn))
    elif opcode == 0x7:
        return Add(x=x, operand=Immediate(value=nn))
    elif opcode == 0x8:
        if n == 0x0:
            return Set(x=x, operand=RegisterOperand(index=y))
        if n == 0x4:
            return Add(x=x, operand=RegisterOperand(index=y))
        if n in _ALU_OPS:
            return _ALU_OPS[n](x=x, y=y)
    elif opcode == 0x9:
        if n == 0:
            return SkipIfNotEqual(x=x, operand=RegisterOperand(index=y))
    elif opcode == 0xA:
        return SetIndex(address=nnn)
    elif opcode == 0xC:
        return Random(x=x, mask=nn)
    elif opcode == 0xD:
        return Draw(x=x, y=y, height=n)
    elif opcode == 0xE:
        if nn in _KEY_OPS:
            return _KEY_OPS[nn](x=x)
    elif opcode == 0xF:
        if nn in _MISC_OPS:
            return _MISC_OPS[nn](x=x)

    return Unrecognized(raw=instruction)


def _format_operand(operand: Operand) -> str:
    if isinstance(operand, Immediate):
        return f"0x{operand.value:02X}"
    return f"V{operand.index:X}"


def describe(instruction) -> str:
    """Short human-readable form of a decoded instruction, for log messages."""
    name = type(instruction).__name__
    if isinstance(instruction, Unrecognized):
        return f"{name} 0x{instruction.raw:04X}"
    if isinstance(instruction, (Jump, Call, SetIndex)):
        return f"{name} 0x{instruction.address:03X}"
    if isinstance(instruction, (SkipIfEqual, SkipIfNotEqual, Set, Add)):
        return f"{name} V{instruction.x:X}, {_format_operand(instruction.operand)}"
    if isinstance(instruction, Random):
        return f"{name} V{instruction.x:X}, 0x{instruction.mask:02X}"
    if isinstance(instruction, Draw):
        return f"{name} V{instruction.x:X}, V{instruction.y:X}, {instruction.height}"
    if hasattr(instruction, "y"):
        return f"{name} V{instruction.x:X}, V{instruction.y:X}"
    if hasattr(instruction, "x"):
        return f"{name} V{instruction.x:X}"
    return name
