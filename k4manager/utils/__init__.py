"""Utility functions for k4manager."""

from k4manager.utils.bits import (
    is_bit_set,
    set_bit,
    clear_bit,
    bit_field,
    byte_from_bits,
    split_wave_number,
    join_wave_number,
)
from k4manager.utils.checksum import checksum, verify_checksum, verify_block, add_checksum
from k4manager.utils.interleave import interleave, deinterleave

__all__ = [
    "is_bit_set",
    "set_bit",
    "clear_bit",
    "bit_field",
    "byte_from_bits",
    "split_wave_number",
    "join_wave_number",
    "checksum",
    "verify_checksum",
    "verify_block",
    "add_checksum",
    "interleave",
    "deinterleave",
]
