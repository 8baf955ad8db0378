"""OpcodeRegistry: the ten Intcode primitives.

Each primitive executes one decoded instruction against a ProgramState,
mutating it in place and leaving the pointer on the next instruction.

Opcodes:
    1  ADD:  mem[out] = a + b
    2  MUL:  mem[out] = a * b
    3  IN:   mem[out] = next input
    4  OUT:  produce a, suspending the run loop
    5  JNZ:  jump to b if a != 0
    6  JZ:   jump to b if a == 0
    7  LT:   mem[out] = 1 if a < b else 0
    8  EQ:   mem[out] = 1 if a == b else 0
    9  ARB:  relative_base += a
    99 HALT: stop

A primitive returns the produced value for OUT and None for everything else.
"""

from typing import Callable, Dict, Optional

from .decode import Instruction
from .errors import InvalidOpcodeError
from .state import ProgramState


Primitive = Callable[[ProgramState, Instruction], Optional[int]]


class OpcodeRegistry:
    """Registry of Intcode primitives, frozen after initialization.

    Attributes:
        _primitives: Mapping from opcode to handler
        _frozen: Whether the registry is locked against modifications
    """

    def __init__(self):
        self._primitives: Dict[int, Primitive] = {}
        self._frozen = False
        self._register_all_primitives()
        self.freeze()

    def _register_all_primitives(self) -> None:
        # Arithmetic
        self.register(1, self._op_add)
        self.register(2, self._op_mul)

        # I/O
        self.register(3, self._op_input)
        self.register(4, self._op_output)

        # Control flow
        self.register(5, self._op_jump_if_true)
        self.register(6, self._op_jump_if_false)

        # Comparison
        self.register(7, self._op_less_than)
        self.register(8, self._op_equals)

        # Special
        self.register(9, self._op_adjust_base)
        self.register(99, self._op_halt)

    def register(self, opcode: int, handler: Primitive) -> None:
        """Register a primitive for an opcode.

        Raises:
            RuntimeError: If registry is frozen
            ValueError: If opcode already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register primitives: registry is frozen")
        if opcode in self._primitives:
            raise ValueError(f"Primitive already registered: {opcode}")
        self._primitives[opcode] = handler

    def freeze(self) -> None:
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def get_valid_opcodes(self) -> set:
        return set(self._primitives.keys())

    def execute(self, state: ProgramState, instruction: Instruction) -> Optional[int]:
        """Execute one decoded instruction.

        Args:
            state: State to mutate; its pointer must address the instruction
            instruction: Decoded instruction at state.pointer

        Returns:
            The output value for opcode 4, otherwise None

        Raises:
            InvalidOpcodeError: If the opcode has no primitive
        """
        handler = self._primitives.get(instruction.opcode)
        if handler is None:
            raise InvalidOpcodeError(instruction.opcode, state.pointer)

        output = handler(state, instruction)
        state.cycle_count += 1
        return output

    # =========================================================================
    # Operand Helpers
    # =========================================================================

    @staticmethod
    def _operand(state: ProgramState, index: int) -> int:
        return state.memory.load(state.pointer + 1 + index)

    def _value(self, state: ProgramState, instruction: Instruction, index: int) -> int:
        """Read parameter `index` honouring its addressing mode."""
        return state.memory.read(
            instruction.modes[index],
            self._operand(state, index),
            state.relative_base,
        )

    def _target(self, state: ProgramState, instruction: Instruction, index: int) -> int:
        """Resolve write parameter `index` to an absolute address."""
        return state.memory.resolve(
            instruction.modes[index],
            self._operand(state, index),
            state.relative_base,
        )

    def _store(self, state: ProgramState, instruction: Instruction, value: int) -> None:
        # Three-parameter instructions always write through their last parameter
        state.memory.write(self._target(state, instruction, 2), value)
        state.pointer += instruction.width

    # =========================================================================
    # Arithmetic Primitives
    # =========================================================================

    def _op_add(self, state: ProgramState, instruction: Instruction) -> None:
        a = self._value(state, instruction, 0)
        b = self._value(state, instruction, 1)
        self._store(state, instruction, a + b)

    def _op_mul(self, state: ProgramState, instruction: Instruction) -> None:
        a = self._value(state, instruction, 0)
        b = self._value(state, instruction, 1)
        self._store(state, instruction, a * b)

    # =========================================================================
    # I/O Primitives
    # =========================================================================

    def _op_input(self, state: ProgramState, instruction: Instruction) -> None:
        """IN out - Store the next input value.

        The target is resolved before the input is consumed so that a bad
        address leaves the input cursor untouched.
        """
        address = self._target(state, instruction, 0)
        state.memory.write(address, state.next_input())
        state.pointer += instruction.width

    def _op_output(self, state: ProgramState, instruction: Instruction) -> int:
        """OUT a - Produce a value; the pointer moves on before returning."""
        value = self._value(state, instruction, 0)
        state.pointer += instruction.width
        return value

    # =========================================================================
    # Control Flow Primitives
    # =========================================================================

    def _op_jump_if_true(self, state: ProgramState, instruction: Instruction) -> None:
        condition = self._value(state, instruction, 0)
        target = self._value(state, instruction, 1)
        if condition != 0:
            state.pointer = target
        else:
            state.pointer += instruction.width

    def _op_jump_if_false(self, state: ProgramState, instruction: Instruction) -> None:
        condition = self._value(state, instruction, 0)
        target = self._value(state, instruction, 1)
        if condition == 0:
            state.pointer = target
        else:
            state.pointer += instruction.width

    # =========================================================================
    # Comparison Primitives
    # =========================================================================

    def _op_less_than(self, state: ProgramState, instruction: Instruction) -> None:
        a = self._value(state, instruction, 0)
        b = self._value(state, instruction, 1)
        self._store(state, instruction, 1 if a < b else 0)

    def _op_equals(self, state: ProgramState, instruction: Instruction) -> None:
        a = self._value(state, instruction, 0)
        b = self._value(state, instruction, 1)
        self._store(state, instruction, 1 if a == b else 0)

    # =========================================================================
    # Special Primitives
    # =========================================================================

    def _op_adjust_base(self, state: ProgramState, instruction: Instruction) -> None:
        state.relative_base += self._value(state, instruction, 0)
        state.pointer += instruction.width

    def _op_halt(self, state: ProgramState, instruction: Instruction) -> None:
        """HALT - Stop execution. Pointer and memory are left as they are."""
        state.halted = True


# Singleton registry instance
_registry: Optional[OpcodeRegistry] = None


def get_registry() -> OpcodeRegistry:
    """Get the singleton opcode registry instance."""
    global _registry
    if _registry is None:
        _registry = OpcodeRegistry()
    return _registry
