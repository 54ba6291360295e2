"""Tests for bit primitives, checksums and interleaving."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from k4manager.utils.bits import (
    bit_field,
    byte_from_bits,
    clear_bit,
    is_bit_set,
    join_wave_number,
    set_bit,
    split_wave_number,
)
from k4manager.utils.checksum import add_checksum, checksum, verify_block, verify_checksum
from k4manager.utils.interleave import deinterleave, interleave


class TestBits:
    """Test cases for single-bit and bit-field helpers."""

    def test_is_bit_set(self):
        assert is_bit_set(0b0000_0100, 2)
        assert not is_bit_set(0b0000_0100, 3)
        assert is_bit_set(0x80, 7)

    def test_set_and_clear_bit(self):
        assert set_bit(0x00, 6) == 0x40
        assert set_bit(0x40, 6) == 0x40
        assert clear_bit(0x7F, 0) == 0x7E
        assert clear_bit(0x00, 5) == 0x00

    def test_bad_position_raises(self):
        with pytest.raises(ValueError):
            is_bit_set(0, 8)
        with pytest.raises(ValueError):
            set_bit(0, -1)

    def test_bit_field(self):
        """Test extracting a right-aligned field."""
        assert bit_field(0b0101_0000, 4, 7) == 5
        assert bit_field(0x4C, 0, 6) == 12
        assert bit_field(0xFF, 0, 8) == 0xFF

    def test_bit_field_bad_range(self):
        with pytest.raises(ValueError):
            bit_field(0, 4, 4)
        with pytest.raises(ValueError):
            bit_field(0, 2, 9)

    def test_byte_from_bits_keeps_other_bits(self):
        assert byte_from_bits(5, 4, 7, 0b0000_0001) == 0b0101_0001
        assert byte_from_bits(0, 4, 6, 0x3F) == 0x0F

    def test_byte_from_bits_inverse_of_bit_field(self):
        for value in range(8):
            assert bit_field(byte_from_bits(value, 2, 5), 2, 5) == value

    def test_byte_from_bits_overflow(self):
        with pytest.raises(ValueError):
            byte_from_bits(8, 2, 5)


class TestWaveNumber:
    """Test cases for the split 9-bit wave number."""

    def test_join(self):
        assert join_wave_number(0, 0x12) == 19
        assert join_wave_number(1, 0x3F) == 192
        assert join_wave_number(1, 0x7F) == 256

    def test_split(self):
        assert split_wave_number(1) == (0, 0)
        assert split_wave_number(128) == (0, 0x7F)
        assert split_wave_number(129) == (1, 0)
        assert split_wave_number(256) == (1, 0x7F)

    def test_every_wave_number_round_trips(self):
        pairs = set()
        for number in range(1, 257):
            msb, lsb = split_wave_number(number)
            assert msb in (0, 1)
            assert 0 <= lsb <= 0x7F
            assert join_wave_number(msb, lsb) == number
            pairs.add((msb, lsb))
        assert len(pairs) == 256

    def test_join_ignores_extra_bits(self):
        """Submix bits sharing the MSB byte are not part of the wave."""
        assert join_wave_number(0x71, 0x00) == 129

    def test_split_out_of_range(self):
        with pytest.raises(ValueError):
            split_wave_number(0)
        with pytest.raises(ValueError):
            split_wave_number(257)


class TestChecksum:
    """Test cases for the K4 block checksum."""

    def test_checksum_simple(self):
        assert checksum(bytes([0x00, 0x01, 0x02])) == 40
        assert checksum(b"") == 0x25

    def test_checksum_wraps_to_seven_bits(self):
        assert checksum([0x7F] * 10) == (0x7F * 10 + 0xA5) & 0x7F
        assert 0 <= checksum([0x7F] * 200) <= 0x7F

    def test_verify(self, melo_vox_data):
        assert verify_checksum(melo_vox_data[:-1], 0x6E)
        assert verify_block(melo_vox_data)

    def test_verify_detects_change(self, melo_vox_data):
        data = bytearray(melo_vox_data)
        data[10] = 0x63
        assert not verify_block(bytes(data))

    def test_verify_empty_block(self):
        assert not verify_block(b"")

    def test_add_checksum(self):
        block = add_checksum([0x09, 0x64, 0x64])
        assert len(block) == 4
        assert verify_block(block)


class TestInterleave:
    """Test cases for byte interleaving."""

    def test_deinterleave(self):
        assert deinterleave(bytes([1, 2, 3, 4, 5, 6]), 2) == [bytes([1, 3, 5]), bytes([2, 4, 6])]

    def test_interleave(self):
        streams = [bytes([1, 5]), bytes([2, 6]), bytes([3, 7]), bytes([4, 8])]
        assert interleave(streams) == bytes(range(1, 9))

    def test_single_patch_sources(self, melo_vox_data):
        """Source lanes of a single patch regroup into the original bytes."""
        region = melo_vox_data[30:58]
        lanes = deinterleave(region, 4)
        assert lanes[0] == bytes([0x00, 0x00, 0x12, 0x4C, 0x00, 0x2C, 0x02])
        assert interleave(lanes) == region

    def test_bad_arguments(self):
        with pytest.raises(ValueError):
            deinterleave(bytes(5), 2)
        with pytest.raises(ValueError):
            deinterleave(bytes(4), 0)
        with pytest.raises(ValueError):
            interleave([bytes(2), bytes(3)])

    def test_interleave_empty(self):
        assert interleave([]) == b""
