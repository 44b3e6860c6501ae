"""Memory and register operations."""

from octacore.state import EmulatorState
from octacore.decode import Add, Immediate, Random, Set, SetIndex
from octacore.refs import Index, Register, add_into, assign, draw_random_byte
from octacore.instructions.alu import alu_add, apply_alu
from octacore.instructions.control_flow import operand_value


def execute_set(state: EmulatorState, instruction: Set) -> EmulatorState:
    """6XNN / 8XY0 - Set VX = NN or VX = VY."""
    return assign(state, Register(index=instruction.x), operand_value(state, instruction.operand))


def execute_add(state: EmulatorState, instruction: Add) -> EmulatorState:
    """7XNN - Add NN to VX without touching VF; 8XY4 - Add VY to VX with carry."""
    if isinstance(instruction.operand, Immediate):
        return add_into(state, Register(index=instruction.x), instruction.operand.value)
    return apply_alu(state, instruction.x, instruction.operand.index, alu_add)


def execute_set_index(state: EmulatorState, instruction: SetIndex) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return assign(state, Index(), instruction.address)


def execute_random(state: EmulatorState, instruction: Random) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    state, random_value = draw_random_byte(state)
    return assign(state, Register(index=instruction.x), random_value & instruction.mask)
