"""IntcodeProgram: the decode-execute loop of the Intcode VM.

    MEMORY -> FETCH -> DECODE -> REGISTRY -> EXECUTE -> STATE
                 |        |          |          |
             [pointer] [opcode +  [opcode ->  [in place]
                        modes]    primitive]

run_program() executes instructions until one of two things happens:

    - opcode 4 produces a value: the value is returned and the program is
      suspended with its pointer already past the instruction. Calling
      run_program() again resumes exactly there.
    - opcode 99 is reached: None is returned and the program is halted.

There is no hidden continuation; the ProgramState fields are the whole story,
so a program can be inspected or snapshotted between calls.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .decode import Instruction, decode_instruction
from .errors import CycleLimitExceededError, IntcodeError, InvalidOpcodeError, ProgramHaltedError
from .memory import Memory
from .registry import OpcodeRegistry, get_registry
from .state import ProgramState, create_initial_state

logger = logging.getLogger(__name__)


@dataclass
class ExecutionTraceEntry:
    """Single entry in the execution trace.

    Attributes:
        cycle: Cycle number after execution
        pointer: Address the instruction was fetched from
        raw: Raw integer at that address
        instruction: Decoded instruction
        pre_state: Snapshot before execution
        post_state: Snapshot after execution
        output: Value produced by an OUT instruction, if any
    """
    cycle: int
    pointer: int
    raw: int
    instruction: Instruction
    pre_state: dict
    post_state: dict
    output: Optional[int] = None


class IntcodeProgram:
    """One running Intcode machine.

    Attributes:
        registry: Frozen opcode registry
        state: Current execution state
        trace: Execution trace entries (only recorded when tracing)
        max_cycles: Optional cycle limit; None runs unbounded
        error: The fault that stopped this program, if any
    """

    def __init__(
        self,
        memory: Iterable[int],
        first_input: int = 0,
        second_input: int = 0,
        *,
        trace: bool = False,
        max_cycles: Optional[int] = None,
        registry: Optional[OpcodeRegistry] = None,
    ):
        """Create a program from an initial memory image.

        Args:
            memory: Initial memory image; copied, never aliased
            first_input: Value for the first input instruction (e.g. a phase setting)
            second_input: Initial value of the reusable input slot
            trace: Record an ExecutionTraceEntry for every step
            max_cycles: Raise CycleLimitExceededError after this many cycles
            registry: Opcode registry (defaults to the shared singleton)
        """
        self.registry = registry or get_registry()
        self.state: ProgramState = create_initial_state(memory, first_input, second_input)
        self.tracing = trace
        self.trace: List[ExecutionTraceEntry] = []
        self.max_cycles = max_cycles
        self.error: Optional[IntcodeError] = None

    # =========================================================================
    # Execution
    # =========================================================================

    def step(self) -> Optional[int]:
        """Execute a single instruction.

        Returns:
            The produced value if the instruction was an output, else None

        Raises:
            ProgramHaltedError: If the program has already halted
            CycleLimitExceededError: If max_cycles has been reached
            IntcodeError: Any decode or addressing fault
        """
        state = self.state
        if state.halted:
            raise ProgramHaltedError("Program is halted")

        if self.max_cycles is not None and state.cycle_count >= self.max_cycles:
            state.halted = True
            self.error = CycleLimitExceededError(self.max_cycles)
            raise self.error

        pointer = state.pointer
        pre_state = state.snapshot() if self.tracing else None

        try:
            raw = state.memory.load(pointer)
            try:
                instruction = decode_instruction(raw)
            except InvalidOpcodeError as e:
                raise InvalidOpcodeError(e.opcode, pointer) from None
            output = self.registry.execute(state, instruction)
        except IntcodeError as e:
            state.halted = True
            self.error = e
            logger.debug("Program faulted at %d: %s", pointer, e)
            raise

        if self.tracing:
            self.trace.append(ExecutionTraceEntry(
                cycle=state.cycle_count,
                pointer=pointer,
                raw=raw,
                instruction=instruction,
                pre_state=pre_state,
                post_state=state.snapshot(),
                output=output,
            ))

        return output

    def run_program(self) -> Optional[int]:
        """Run until the next output or halt.

        Returns:
            The produced value, or None once opcode 99 executes

        Raises:
            ProgramHaltedError: If called again after a halt
            IntcodeError: Any decode or addressing fault, unrecovered
        """
        if self.state.halted:
            raise ProgramHaltedError("Program is halted")

        while True:
            output = self.step()
            if output is not None:
                logger.debug("Output %d at cycle %d", output, self.state.cycle_count)
                return output
            if self.state.halted:
                logger.debug("Halted after %d cycles", self.state.cycle_count)
                return None

    def run_to_completion(self) -> List[int]:
        """Resume until halt, collecting every produced value."""
        outputs = []
        while True:
            value = self.run_program()
            if value is None:
                return outputs
            outputs.append(value)

    def set_input(self, value: int) -> None:
        """Overwrite the reusable second input slot between resumptions."""
        self.state.set_input(value)

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def memory(self) -> Memory:
        return self.state.memory

    @property
    def pointer(self) -> int:
        return self.state.pointer

    @property
    def relative_base(self) -> int:
        return self.state.relative_base

    def is_halted(self) -> bool:
        return self.state.halted

    def get_cycle_count(self) -> int:
        return self.state.cycle_count

    def snapshot(self) -> dict:
        return self.state.snapshot()

    def print_trace(self) -> None:
        """Print execution trace in human-readable format."""
        print("=" * 70)
        print("INTCODE EXECUTION TRACE")
        print("=" * 70)

        for entry in self.trace:
            print(f"\n[Cycle {entry.cycle}] @{entry.pointer} {entry.raw} -> {entry.instruction}")

            pre, post = entry.pre_state, entry.post_state
            if pre["relative_base"] != post["relative_base"]:
                print(f"  RB: {pre['relative_base']} -> {post['relative_base']}")
            if pre["memory_size"] != post["memory_size"]:
                print(f"  Memory grew: {pre['memory_size']} -> {post['memory_size']}")
            if not post["halted"] and post["pointer"] != pre["pointer"] + entry.instruction.width:
                print(f"  Jump: {pre['pointer']} -> {post['pointer']}")
            if entry.output is not None:
                print(f"  Output: {entry.output}")

        print("\n" + "=" * 70)
        print("FINAL STATE")
        print("=" * 70)
        print(f"  {self.state}")
        if self.error is not None:
            print(f"  Error: {self.error}")

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and final state
        """
        return {
            "cycles": self.get_cycle_count(),
            "halted": self.is_halted(),
            "pointer": self.pointer,
            "relative_base": self.relative_base,
            "memory_size": len(self.memory),
            "trace_length": len(self.trace),
            "outputs": [e.output for e in self.trace if e.output is not None],
            "error": str(self.error) if self.error is not None else None,
        }
