"""Intcode: a small pausable virtual machine for integer-encoded programs.

A program is a flat sequence of signed integers. Instructions are variable
width: a two-digit opcode plus one addressing-mode digit per parameter.
Memory grows on demand, and the run loop suspends every time a value is
output so that several machines can hand values to one another.

Architecture:
    TEXT -> parse_program -> MEMORY -> FETCH -> DECODE -> REGISTRY -> STATE
                                                              |
                                              OUT: suspend and return value
                                              HALT: return None

Modules:
    errors: IntcodeError hierarchy
    decode: AddressingMode, Instruction, decode_instruction, parse_program
    memory: Auto-growing Memory with position/immediate/relative addressing
    state: ProgramState execution context
    registry: Frozen table of the ten opcode primitives
    program: IntcodeProgram run loop (run_program / set_input)
    amplifier: AmplifierNetwork phase-setting search
"""

__version__ = "0.1.0"
__author__ = "Intcode Project"

from .errors import (
    IntcodeError,
    InvalidOpcodeError,
    InvalidAddressingModeError,
    UnknownInputSlotError,
    InvalidAddressError,
    ProgramHaltedError,
    CycleLimitExceededError,
)
from .decode import AddressingMode, Instruction, decode_instruction, parse_program, load_program_file
from .memory import Memory
from .state import ProgramState
from .registry import OpcodeRegistry
from .program import IntcodeProgram
from .amplifier import AmplifierNetwork

__all__ = [
    "IntcodeError",
    "InvalidOpcodeError",
    "InvalidAddressingModeError",
    "UnknownInputSlotError",
    "InvalidAddressError",
    "ProgramHaltedError",
    "CycleLimitExceededError",
    "AddressingMode",
    "Instruction",
    "decode_instruction",
    "parse_program",
    "load_program_file",
    "Memory",
    "ProgramState",
    "OpcodeRegistry",
    "IntcodeProgram",
    "AmplifierNetwork",
]
