"""ProgramState: mutable execution context for one Intcode program.

State Components:
    - Memory: auto-growing integer memory owned by this program
    - Pointer: address of the next instruction
    - Relative base: offset for RELATIVE-mode parameters
    - Inputs: a one-shot first input and a reusable second input
    - Input cursor: which input slot the next read consumes
    - Halted: set once opcode 99 executes
    - Cycle count: number of executed instructions

Unlike a snapshot-per-step design, every instruction mutates this object in
place. Use snapshot() to capture it between resumptions.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .errors import UnknownInputSlotError
from .memory import Memory


FIRST_INPUT_SLOT = 1
SECOND_INPUT_SLOT = 2


@dataclass
class ProgramState:
    """Execution context of a single Intcode program.

    Attributes:
        memory: Program memory
        pointer: Instruction pointer
        relative_base: Base added to RELATIVE-mode operands
        first_input: Value returned by the first input instruction only
        second_input: Value returned by every later input instruction
        input_cursor: Input slot consumed by the next input instruction
        halted: Whether opcode 99 has executed
        cycle_count: Number of executed instructions
    """
    memory: Memory = field(default_factory=Memory)
    pointer: int = 0
    relative_base: int = 0
    first_input: int = 0
    second_input: int = 0
    input_cursor: int = FIRST_INPUT_SLOT
    halted: bool = False
    cycle_count: int = 0

    def next_input(self) -> int:
        """Consume the next input value.

        The first call returns first_input and moves the cursor on for good;
        every later call returns the current second_input.

        Raises:
            UnknownInputSlotError: If the cursor holds an unknown slot
        """
        if self.input_cursor == FIRST_INPUT_SLOT:
            self.input_cursor = SECOND_INPUT_SLOT
            return self.first_input
        if self.input_cursor == SECOND_INPUT_SLOT:
            return self.second_input
        raise UnknownInputSlotError(self.input_cursor)

    def set_input(self, value: int) -> None:
        """Overwrite the reusable second input slot."""
        self.second_input = value

    def snapshot(self) -> dict:
        """Capture the scalar state for tracing.

        Memory is summarised by its size; use memory.dump() for contents.
        """
        return {
            "pointer": self.pointer,
            "relative_base": self.relative_base,
            "first_input": self.first_input,
            "second_input": self.second_input,
            "input_cursor": self.input_cursor,
            "halted": self.halted,
            "cycle_count": self.cycle_count,
            "memory_size": len(self.memory),
        }

    def validate(self) -> bool:
        """Validate state integrity.

        Checks:
            - Pointer is non-negative
            - Input cursor names a known slot
            - Cycle count is non-negative
            - Every memory cell is an int

        Returns:
            True if state is valid, False otherwise
        """
        if self.pointer < 0:
            return False
        if self.input_cursor not in (FIRST_INPUT_SLOT, SECOND_INPUT_SLOT):
            return False
        if self.cycle_count < 0:
            return False
        return all(isinstance(cell, int) for cell in self.memory.cells)

    def __str__(self) -> str:
        return (
            f"[Cycle {self.cycle_count}] IP={self.pointer} RB={self.relative_base} "
            f"IN=({self.first_input},{self.second_input}) slot={self.input_cursor} "
            f"MEM={len(self.memory)} {'HALTED' if self.halted else ''}"
        ).rstrip()


def create_initial_state(program: Iterable[int], first_input: int = 0,
                         second_input: int = 0) -> ProgramState:
    """Create a fresh state with a program image loaded into its own memory.

    Args:
        program: Initial memory image
        first_input: One-shot first input (e.g. a phase setting)
        second_input: Initial value of the reusable input slot

    Returns:
        ProgramState with pointer and relative base at zero
    """
    return ProgramState(
        memory=Memory(program),
        pointer=0,
        relative_base=0,
        first_input=first_input,
        second_input=second_input,
        input_cursor=FIRST_INPUT_SLOT,
        halted=False,
        cycle_count=0,
    )
