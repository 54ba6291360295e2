"""
Kawai K4 block checksum utilities.

Every K4 data block (single, multi, drum common, drum note, effect) ends
with a checksum byte calculated as:
1. Sum all data bytes of the block (the checksum byte itself excluded)
2. Add 0xA5
3. Take the lower 7 bits

The checksum only marks integrity for the instrument's own acceptance
logic. Parsing never rejects a block with a wrong checksum, but every
block this package emits carries a correct one.
"""

from typing import List, Union

CHECKSUM_ADDEND = 0xA5


def checksum(data: Union[bytes, List[int]]) -> int:
    """
    Calculate the K4 checksum over a block's data bytes.

    Args:
        data: Data bytes, not including the checksum byte

    Returns:
        Checksum value (0-127)

    Example:
        >>> checksum(bytes([0x00, 0x01, 0x02]))
        40
    """
    total = sum(b & 0xFF for b in data)
    return (total + CHECKSUM_ADDEND) & 0x7F


def verify_checksum(data: Union[bytes, List[int]], expected_checksum: int) -> bool:
    """
    Verify a K4 checksum.

    Args:
        data: Bytes the checksum was calculated over
        expected_checksum: The checksum byte from the block

    Returns:
        True if checksum is valid, False otherwise
    """
    return checksum(data) == expected_checksum


def verify_block(block: Union[bytes, List[int]]) -> bool:
    """
    Verify a complete block whose last byte is its checksum.

    Args:
        block: Block data including the trailing checksum byte

    Returns:
        True if the trailing byte matches the checksum of the rest
    """
    if isinstance(block, list):
        block = bytes(block)

    if len(block) < 1:
        return False

    return verify_checksum(block[:-1], block[-1])


def add_checksum(data: Union[bytes, List[int]]) -> bytes:
    """
    Calculate and append checksum to data.

    Args:
        data: Block data bytes

    Returns:
        Original data with checksum appended
    """
    if isinstance(data, list):
        data = bytes(data)

    return bytes(data) + bytes([checksum(data)])
