"""Tests for the instruction decoder and program text parser."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from intcode.decode import (
    AddressingMode,
    Instruction,
    PARAMETER_COUNTS,
    decode_instruction,
    load_program_file,
    parse_program,
)
from intcode.errors import InvalidAddressingModeError, InvalidOpcodeError

P = AddressingMode.POSITION
I = AddressingMode.IMMEDIATE
R = AddressingMode.RELATIVE


class TestInstructionDataclass:
    """Test Instruction structure."""

    def test_fields(self):
        """Instruction holds opcode and modes."""
        instruction = Instruction(1, (P, I, P))
        assert instruction.opcode == 1
        assert instruction.modes == (P, I, P)

    def test_width_and_mnemonic(self):
        """Width counts the opcode cell plus parameters."""
        assert Instruction(1, (P, P, P)).width == 4
        assert Instruction(99, ()).width == 1
        assert Instruction(9, (R,)).mnemonic == "ARB"

    def test_str(self):
        """String form shows mnemonic and mode initials."""
        assert str(Instruction(2, (P, I, P))) == "MUL(P,I,P)"
        assert str(Instruction(99, ())) == "HALT"


class TestParameterCounts:
    """Parameter count depends only on the opcode."""

    @pytest.mark.parametrize("opcode,count", [
        (1, 3), (2, 3), (3, 1), (4, 1), (5, 2),
        (6, 2), (7, 3), (8, 3), (9, 1), (99, 0),
    ])
    def test_count_without_mode_digits(self, opcode, count):
        """Bare opcodes default every parameter to position mode."""
        instruction = decode_instruction(opcode)
        assert len(instruction.modes) == count
        assert all(mode is P for mode in instruction.modes)

    @pytest.mark.parametrize("opcode", sorted(PARAMETER_COUNTS))
    def test_count_with_extra_mode_digits(self, opcode):
        """Extra mode digits beyond the parameter count are ignored."""
        instruction = decode_instruction(11100 + opcode)
        assert len(instruction.modes) == PARAMETER_COUNTS[opcode]


class TestModeDecoding:
    """Test addressing mode extraction."""

    def test_mixed_modes(self):
        """1002 -> MUL with (position, immediate, position)."""
        instruction = decode_instruction(1002)
        assert instruction.opcode == 2
        assert instruction.modes == (P, I, P)

    def test_relative_output(self):
        """204 -> OUT with a relative parameter."""
        instruction = decode_instruction(204)
        assert instruction.opcode == 4
        assert instruction.modes == (R,)

    def test_all_modes(self):
        """21101 -> ADD (immediate, immediate, relative)."""
        instruction = decode_instruction(21101)
        assert instruction.modes == (I, I, R)

    def test_missing_digits_default_to_position(self):
        """109 -> ARB immediate; 1105 -> JNZ (immediate, immediate)."""
        assert decode_instruction(109).modes == (I,)
        assert decode_instruction(1105).modes == (I, I)
        assert decode_instruction(105).modes == (I, P)


class TestDecodeErrors:
    """Test decoder error handling."""

    @pytest.mark.parametrize("raw", [0, 10, 42, 98, 100, 1010])
    def test_invalid_opcode(self, raw):
        """Opcodes outside the instruction set are rejected."""
        with pytest.raises(InvalidOpcodeError) as excinfo:
            decode_instruction(raw)
        assert excinfo.value.opcode == raw % 100

    def test_negative_raw(self):
        """Negative values are never valid instructions."""
        with pytest.raises(InvalidOpcodeError):
            decode_instruction(-1)

    def test_invalid_mode_digit(self):
        """Mode digit 3 is rejected."""
        with pytest.raises(InvalidAddressingModeError) as excinfo:
            decode_instruction(301)
        assert excinfo.value.mode == 3

    def test_invalid_mode_in_later_parameter(self):
        """A bad digit in any used parameter slot is rejected."""
        with pytest.raises(InvalidAddressingModeError):
            decode_instruction(90001)

    def test_unused_bad_digit_ignored(self):
        """A bad digit past the last parameter is never read."""
        assert decode_instruction(9104).modes == (I,)


class TestProgramParser:
    """Test parse_program function."""

    def test_simple_program(self):
        """Comma-separated integers parse in order."""
        assert parse_program("1,0,0,3,99") == [1, 0, 0, 3, 99]

    def test_whitespace_and_newline(self):
        """Surrounding whitespace and trailing newline are ignored."""
        assert parse_program("  104, -7 ,99\n") == [104, -7, 99]

    def test_trailing_comma(self):
        """A trailing comma does not add a field."""
        assert parse_program("99,") == [99]

    def test_large_values(self):
        """Values beyond 32 bits survive parsing."""
        assert parse_program("104,1125899906842624,99")[1] == 1125899906842624

    def test_empty_source(self):
        """Empty text yields an empty image."""
        assert parse_program("") == []

    def test_invalid_field(self):
        """Non-integer fields are reported with their position."""
        with pytest.raises(ValueError, match="position 1"):
            parse_program("1,x,3")

    def test_empty_middle_field(self):
        """An empty field between commas is rejected."""
        with pytest.raises(ValueError):
            parse_program("1,,3")

    def test_load_program_file(self, tmp_path):
        """Programs load from a file."""
        path = tmp_path / "program.txt"
        path.write_text("3,0,4,0,99\n")
        assert load_program_file(path) == [3, 0, 4, 0, 99]
