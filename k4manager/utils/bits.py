"""
Bit and byte primitives for K4 System Exclusive data.

Bit positions are LSB-first: bit 0 is the least significant bit, matching
the bit numbering in the Kawai MIDI implementation charts.

Arguments to these helpers come from fixed wire-layout constants, never
from untrusted input, so a bad position or range is a defect in the caller
and raises ValueError immediately.

Example:
    >>> bit_field(0b0101_0000, 4, 7)
    5
    >>> byte_from_bits(5, 4, 7, 0b0000_0001)
    81
"""

from typing import Tuple


def _check_position(position: int) -> None:
    if not 0 <= position < 8:
        raise ValueError(f"Bit position must be 0-7, got {position}")


def _check_range(start: int, end: int) -> None:
    if not 0 <= start < end <= 8:
        raise ValueError(f"Bit range must satisfy 0 <= start < end <= 8, got [{start}, {end})")


def is_bit_set(byte: int, position: int) -> bool:
    """Check whether bit ``position`` of ``byte`` is set."""
    _check_position(position)
    return (byte >> position) & 0x01 == 1


def set_bit(byte: int, position: int) -> int:
    """Return ``byte`` with bit ``position`` set."""
    _check_position(position)
    return (byte | (1 << position)) & 0xFF


def clear_bit(byte: int, position: int) -> int:
    """Return ``byte`` with bit ``position`` cleared."""
    _check_position(position)
    return byte & ~(1 << position) & 0xFF


def bit_field(byte: int, start: int, end: int) -> int:
    """
    Extract the bits in ``[start, end)`` as a right-aligned value.

    Args:
        byte: Source byte
        start: First bit position (inclusive)
        end: Last bit position (exclusive)

    Returns:
        The field value, 0 to 2**(end - start) - 1
    """
    _check_range(start, end)
    mask = (1 << (end - start)) - 1
    return (byte >> start) & mask


def byte_from_bits(value: int, start: int, end: int, byte: int = 0) -> int:
    """
    Place ``value`` into bits ``[start, end)`` of ``byte``.

    This is the inverse of :func:`bit_field`. Bits outside the field are
    kept as they are in ``byte``.

    Raises:
        ValueError: If the range is invalid or the value does not fit
    """
    _check_range(start, end)
    width = end - start
    if not 0 <= value < (1 << width):
        raise ValueError(f"Value {value} does not fit in {width} bits")
    mask = ((1 << width) - 1) << start
    return ((byte & ~mask) | (value << start)) & 0xFF


def split_wave_number(number: int) -> Tuple[int, int]:
    """
    Split a wave number (1-256) into its MSB bit and 7-bit LSB.

    Returns:
        (msb, lsb) where msb is 0 or 1
    """
    if not 1 <= number <= 256:
        raise ValueError(f"Wave number must be 1-256, got {number}")
    value = number - 1
    return (value >> 7) & 0x01, value & 0x7F


def join_wave_number(msb: int, lsb: int) -> int:
    """Combine a wave MSB bit and 7-bit LSB into a wave number (1-256)."""
    return (((msb & 0x01) << 7) | (lsb & 0x7F)) + 1
