"""Control flow instructions."""

from octacore.state import EmulatorState
from octacore.decode import Jump, Call, Immediate
from octacore.refs import Key, ProgramCounter, Register, add_into, assign, look
from octacore.stack import push


def execute_jump(state: EmulatorState, instruction: Jump) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return assign(state, ProgramCounter(), instruction.address)


def execute_call(state: EmulatorState, instruction: Call) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return assign(state, ProgramCounter(), instruction.address)


def skip_if(state: EmulatorState, condition: bool) -> EmulatorState:
    """Skip the next instruction when ``condition`` holds."""
    return add_into(state, ProgramCounter(), 2) if condition else state


def operand_value(state: EmulatorState, operand) -> int:
    """Resolve an immediate or register operand to its value."""
    if isinstance(operand, Immediate):
        return operand.value
    return look(state, Register(index=operand.index))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> EmulatorState:
        return skip_if(state, condition_fn(state, instruction))
    return skip_instruction


execute_skip_if_equal = make_skip_instruction(
    lambda state, inst: look(state, Register(index=inst.x)) == operand_value(state, inst.operand)
)

execute_skip_if_not_equal = make_skip_instruction(
    lambda state, inst: look(state, Register(index=inst.x)) != operand_value(state, inst.operand)
)


def _key_for(state: EmulatorState, x: int) -> Key:
    return Key(index=look(state, Register(index=x)) & 0xF)


execute_skip_if_key = make_skip_instruction(
    lambda state, inst: look(state, _key_for(state, inst.x))
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not look(state, _key_for(state, inst.x))
)
