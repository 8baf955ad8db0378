"""Instruction decoder for the Intcode VM.

An Intcode instruction is a single integer. Its two low decimal digits select
the opcode; the remaining digits, read right to left, give one addressing mode
per parameter:

    1002  ->  opcode 02, modes (POSITION, IMMEDIATE, POSITION)
      ^^ opcode
     ^ mode of parameter 1 (0)
    ^ mode of parameter 2 (1)
      (parameter 3 has no digit and defaults to POSITION)

This module also hosts the loader for the comma-separated program text.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .errors import InvalidAddressingModeError, InvalidOpcodeError


class AddressingMode(Enum):
    """How a parameter's operand is interpreted."""

    POSITION = 0   # operand is an address
    IMMEDIATE = 1  # operand is the value itself
    RELATIVE = 2   # operand is an offset from the relative base


# Number of parameters following each opcode
PARAMETER_COUNTS: Dict[int, int] = {
    1: 3,
    2: 3,
    3: 1,
    4: 1,
    5: 2,
    6: 2,
    7: 3,
    8: 3,
    9: 1,
    99: 0,
}

MNEMONICS: Dict[int, str] = {
    1: "ADD",
    2: "MUL",
    3: "IN",
    4: "OUT",
    5: "JNZ",
    6: "JZ",
    7: "LT",
    8: "EQ",
    9: "ARB",
    99: "HALT",
}

HALT_OPCODE = 99


@dataclass(frozen=True)
class Instruction:
    """Decoded form of one Intcode instruction.

    Attributes:
        opcode: Operation selector (1-9 or 99)
        modes: One addressing mode per parameter, in parameter order
    """
    opcode: int
    modes: Tuple[AddressingMode, ...]

    @property
    def mnemonic(self) -> str:
        return MNEMONICS[self.opcode]

    @property
    def width(self) -> int:
        """Number of memory cells the instruction occupies."""
        return 1 + len(self.modes)

    def __str__(self) -> str:
        modes = ",".join(mode.name[0] for mode in self.modes)
        return f"{self.mnemonic}({modes})" if modes else self.mnemonic


def decode_instruction(raw: int) -> Instruction:
    """Decode a raw integer into an opcode and its parameter modes.

    Args:
        raw: Value found at the instruction pointer

    Returns:
        Instruction with exactly PARAMETER_COUNTS[opcode] modes

    Raises:
        InvalidOpcodeError: If the opcode is not recognised
        InvalidAddressingModeError: If a mode digit is not 0, 1 or 2
    """
    if raw < 0:
        raise InvalidOpcodeError(raw)

    opcode = raw % 100
    if opcode not in PARAMETER_COUNTS:
        raise InvalidOpcodeError(opcode)

    mode_digits = raw // 100
    modes = []
    for _ in range(PARAMETER_COUNTS[opcode]):
        digit = mode_digits % 10
        mode_digits //= 10
        try:
            modes.append(AddressingMode(digit))
        except ValueError:
            raise InvalidAddressingModeError(digit) from None

    return Instruction(opcode, tuple(modes))


def parse_program(source: str) -> List[int]:
    """Parse comma-separated Intcode text into an initial memory image.

    Surrounding whitespace and newlines are ignored, as is a trailing comma.

    Args:
        source: Program text, e.g. "1,0,0,3,99"

    Returns:
        List of integers

    Raises:
        ValueError: If a field is not a base-10 integer
    """
    fields = [field.strip() for field in source.strip().split(",")]
    if fields and fields[-1] == "":
        fields.pop()

    memory = []
    for index, field in enumerate(fields):
        try:
            memory.append(int(field))
        except ValueError:
            raise ValueError(f"Invalid integer at position {index}: {field!r}") from None
    return memory


def load_program_file(path: Union[str, Path]) -> List[int]:
    """Read and parse an Intcode program file."""
    return parse_program(Path(path).read_text())
