"""Tests for the growable Memory model."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from intcode.decode import AddressingMode
from intcode.errors import InvalidAddressError
from intcode.memory import Memory


class TestMemoryCreation:
    """Test Memory initialization."""

    def test_copies_initial_image(self):
        """Memory never aliases the caller's list."""
        image = [1, 2, 3]
        memory = Memory(image)
        memory.write(0, 99)
        assert image == [1, 2, 3]
        assert memory.dump() == [99, 2, 3]

    def test_empty_default(self):
        """Default memory is empty."""
        assert len(Memory()) == 0


class TestMemoryRead:
    """Test mode-dependent reads."""

    @pytest.fixture
    def memory(self):
        return Memory([10, 20, 30, 40])

    def test_position(self, memory):
        """Position mode dereferences the operand."""
        assert memory.read(AddressingMode.POSITION, 2) == 30

    def test_immediate(self, memory):
        """Immediate mode returns the operand and never grows memory."""
        assert memory.read(AddressingMode.IMMEDIATE, 1000) == 1000
        assert memory.read(AddressingMode.IMMEDIATE, -5) == -5
        assert len(memory) == 4

    def test_relative(self, memory):
        """Relative mode adds the relative base."""
        assert memory.read(AddressingMode.RELATIVE, -1, relative_base=2) == 20
        assert memory.read(AddressingMode.RELATIVE, 1, relative_base=2) == 40

    def test_read_past_end_grows(self, memory):
        """Reading beyond the end zero-fills and returns 0."""
        assert memory.read(AddressingMode.POSITION, 9) == 0
        assert len(memory) == 10
        assert memory.dump()[4:] == [0] * 6

    def test_negative_address(self, memory):
        """Negative resolved addresses fail instead of wrapping."""
        with pytest.raises(InvalidAddressError):
            memory.read(AddressingMode.POSITION, -1)
        with pytest.raises(InvalidAddressError):
            memory.read(AddressingMode.RELATIVE, -3, relative_base=1)


class TestMemoryWrite:
    """Test writes and growth."""

    def test_write_in_range(self):
        """Write inside current bounds."""
        memory = Memory([0, 0])
        memory.write(1, 7)
        assert memory.dump() == [0, 7]

    def test_write_past_end_zero_fills(self):
        """Growth zero-fills intermediate cells and keeps lower values."""
        memory = Memory([5, 6, 7])
        memory.write(8, 42)
        assert len(memory) == 9
        assert memory.dump() == [5, 6, 7, 0, 0, 0, 0, 0, 42]

    def test_growth_is_monotonic(self):
        """Later writes at lower addresses never shrink memory."""
        memory = Memory()
        memory.write(100, 1)
        memory.write(3, 2)
        assert len(memory) == 101
        assert memory[100] == 1
        assert memory[3] == 2

    def test_negative_write(self):
        """Negative write addresses fail."""
        with pytest.raises(InvalidAddressError):
            Memory([0]).write(-1, 1)


class TestMemoryResolve:
    """Test write-target resolution."""

    def test_position(self):
        assert Memory().resolve(AddressingMode.POSITION, 12) == 12

    def test_relative(self):
        assert Memory().resolve(AddressingMode.RELATIVE, -2, relative_base=10) == 8

    def test_immediate_is_direct_address(self):
        """An immediate write parameter names the address itself."""
        assert Memory().resolve(AddressingMode.IMMEDIATE, 3) == 3

    def test_immediate_negative_rejected(self):
        with pytest.raises(InvalidAddressError):
            Memory().resolve(AddressingMode.IMMEDIATE, -1)

    def test_negative_rejected(self):
        with pytest.raises(InvalidAddressError):
            Memory().resolve(AddressingMode.RELATIVE, -5, relative_base=2)

    def test_resolve_does_not_grow(self):
        """Resolution alone leaves memory untouched."""
        memory = Memory([1])
        memory.resolve(AddressingMode.POSITION, 50)
        assert len(memory) == 1
