"""Call stack operations."""

import jax.numpy as jnp
from octacore.constants import ADDRESS_MASK
from octacore.errors import AddressOverflow, StackOverflow, StackUnderflow
from octacore.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack.

    Raises:
        StackOverflow: if the stack is already full.
        AddressOverflow: if the return address lies past the end of memory.
    """
    if stack.pointer >= stack.data.shape[0]:
        raise StackOverflow(stack.data.shape[0])
    if int(address) > ADDRESS_MASK:
        raise AddressOverflow(int(address))
    new_data = stack.data.at[stack.pointer].set(address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.pointer == 0:
        raise StackUnderflow()
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
