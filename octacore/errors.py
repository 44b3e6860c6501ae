"""Exceptions raised by the octacore virtual CPU."""


class EmulatorError(Exception):
    """Base class for every error raised while building or running a machine."""


class ConstructionError(EmulatorError):
    """The program image or font does not fit the memory layout."""


class StackUnderflow(EmulatorError):
    """Return executed with an empty call stack."""

    def __init__(self):
        super().__init__("return with empty call stack")


class StackOverflow(EmulatorError):
    """Call executed with a full call stack."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"call stack full ({depth} entries)")


class UnrecognizedInstruction(EmulatorError):
    """Instruction word matching no known opcode."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"unrecognized instruction 0x{word:04X}")


class AddressOverflow(EmulatorError):
    """Computed memory access outside 0x000-0xFFF."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"memory access at 0x{address:X} is outside 0x000-0xFFF")
