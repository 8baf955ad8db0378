"""Growable memory for the Intcode VM.

Memory is a dense list of integers that is logically infinite: touching any
address at or past the end zero-fills up to and including that address.
It only ever grows.
"""

from typing import Iterable, List

from .decode import AddressingMode
from .errors import InvalidAddressError


class Memory:
    """Zero-indexed, auto-growing integer memory.

    Attributes:
        cells: Backing list, owned by this instance
    """

    def __init__(self, initial: Iterable[int] = ()):
        # Copy so that two programs built from one image never alias
        self.cells: List[int] = list(initial)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, address: int) -> int:
        return self.load(address)

    def _ensure(self, address: int) -> None:
        if address < 0:
            raise InvalidAddressError(address)
        if address >= len(self.cells):
            self.cells.extend([0] * (address + 1 - len(self.cells)))

    def load(self, address: int) -> int:
        """Fetch the raw value stored at an absolute address."""
        self._ensure(address)
        return self.cells[address]

    def read(self, mode: AddressingMode, operand: int, relative_base: int = 0) -> int:
        """Read a parameter value according to its addressing mode.

        Args:
            mode: Addressing mode of the parameter
            operand: Raw operand following the opcode
            relative_base: Current relative base of the owning program

        Returns:
            The operand itself for IMMEDIATE, otherwise the value stored at the
            resolved address
        """
        if mode is AddressingMode.IMMEDIATE:
            return operand
        if mode is AddressingMode.RELATIVE:
            return self.load(relative_base + operand)
        return self.load(operand)

    def resolve(self, mode: AddressingMode, operand: int, relative_base: int = 0) -> int:
        """Resolve a write parameter to an absolute address.

        Write parameters are direct addresses: POSITION and IMMEDIATE both
        name the operand itself, RELATIVE offsets it from the relative base.

        Raises:
            InvalidAddressError: If the address is negative
        """
        if mode is AddressingMode.RELATIVE:
            address = relative_base + operand
        else:
            address = operand
        if address < 0:
            raise InvalidAddressError(address)
        return address

    def write(self, address: int, value: int) -> None:
        """Store a value, growing memory if needed."""
        self._ensure(address)
        self.cells[address] = value

    def dump(self) -> List[int]:
        """Get a copy of all memory cells."""
        return list(self.cells)
