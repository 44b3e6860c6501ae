"""ALU operations (8xxx).

Each ``alu_*`` function takes the pre-operation values of VX and VY and
returns ``(result, flag)``. ``flag`` is ``None`` for operations that leave VF
alone. The result is written to VX before the flag is written to VF, so when
X is F the flag wins.
"""

from typing import Optional

from octacore.state import EmulatorState
from octacore.refs import FLAG, Register, assign, look2


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    carry = 1 if vy > 255 - vx else 0
    return (vx + vy) & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 0 on borrow."""
    no_borrow = 0 if vy > vx else 1
    return (vx - vy) & 0xFF, no_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 0 on borrow."""
    no_borrow = 0 if vx > vy else 1
    return (vy - vx) & 0xFF, no_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, vx >> 7


def apply_alu(state: EmulatorState, x: int, y: int, operation) -> EmulatorState:
    """Run ``operation`` on (VX, VY), store the result in VX, then the flag in VF."""
    vx, vy = look2(state, Register(index=x), Register(index=y))
    result, flag = operation(vx, vy)
    state = assign(state, Register(index=x), result)
    if flag is not None:
        state = assign(state, FLAG, flag)
    return state


def make_alu_instruction(operation):
    """Factory for two-register ALU instructions."""
    def alu_instruction(state: EmulatorState, instruction) -> EmulatorState:
        return apply_alu(state, instruction.x, instruction.y, operation)
    alu_instruction.__doc__ = operation.__doc__
    return alu_instruction


execute_or = make_alu_instruction(alu_or)
execute_and = make_alu_instruction(alu_and)
execute_xor = make_alu_instruction(alu_xor)
execute_sub_xy = make_alu_instruction(alu_sub_xy)
execute_shift_right = make_alu_instruction(alu_shift_right)
execute_sub_yx = make_alu_instruction(alu_sub_yx)
execute_shift_left = make_alu_instruction(alu_shift_left)
