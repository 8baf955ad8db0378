"""Exception hierarchy for the Intcode VM.

Every fault raised by the decoder, memory model or execution engine derives
from IntcodeError. Errors are fatal for the program instance that raised them:
the run loop stops immediately and the exception reaches the caller unchanged.
"""

from typing import Optional


class IntcodeError(RuntimeError):
    """Base class for all Intcode VM errors."""


class InvalidOpcodeError(IntcodeError):
    """Raised when the value at the instruction pointer is not a known opcode.

    Attributes:
        opcode: The decoded opcode (raw value mod 100)
        pointer: Instruction pointer at decode time, if known
    """

    def __init__(self, opcode: int, pointer: Optional[int] = None):
        self.opcode = opcode
        self.pointer = pointer
        where = f" at address {pointer}" if pointer is not None else ""
        super().__init__(f"Invalid opcode {opcode}{where}")


class InvalidAddressingModeError(IntcodeError):
    """Raised for a mode digit outside {0, 1, 2}."""

    def __init__(self, mode: int):
        self.mode = mode
        super().__init__(f"Invalid addressing mode: {mode}")


class UnknownInputSlotError(IntcodeError):
    """Raised when the input cursor is in a state the engine does not know."""

    def __init__(self, cursor: int):
        self.cursor = cursor
        super().__init__(f"Cannot read input slot {cursor}")


class InvalidAddressError(IntcodeError):
    """Raised when an address resolves to a negative index."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Negative memory address: {address}")


class ProgramHaltedError(IntcodeError):
    """Raised when a halted program is resumed."""


class CycleLimitExceededError(IntcodeError):
    """Raised when an optional cycle limit is reached before halting."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Max cycles ({limit}) exceeded")
