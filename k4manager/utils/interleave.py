"""
Byte interleaving used inside K4 single patches and drum notes.

Parallel units (4 sources, 4 amplifiers, 2 filters, 2 drum sources) are
not stored one after the other. Instead byte i of unit 1 is followed by
byte i of unit 2 and so on, then byte i+1 of unit 1:

    unit:   1  2  3  4  1  2  3  4  1 ...
    byte:   0  0  0  0  1  1  1  1  2 ...

Decoding de-interleaves by stride extraction first and then decodes each
unit on its own. Encoding encodes each unit on its own and interleaves
the results.
"""

from typing import List, Sequence


def deinterleave(data: bytes, count: int) -> List[bytes]:
    """
    Split an interleaved byte stream into ``count`` unit streams.

    Args:
        data: Interleaved bytes; length must be a multiple of ``count``
        count: Number of interleaved units

    Returns:
        List of ``count`` byte strings, one per unit

    Example:
        >>> deinterleave(bytes([1, 2, 3, 4, 5, 6]), 2)
        [b'\\x01\\x03\\x05', b'\\x02\\x04\\x06']
    """
    if count < 1:
        raise ValueError(f"Unit count must be positive, got {count}")
    if len(data) % count != 0:
        raise ValueError(f"Length {len(data)} is not a multiple of {count}")

    data = bytes(data)
    return [data[lane::count] for lane in range(count)]


def interleave(streams: Sequence[bytes]) -> bytes:
    """
    Merge unit streams into one interleaved byte stream.

    Args:
        streams: Per-unit byte strings, all of the same length

    Returns:
        Interleaved bytes

    Example:
        >>> interleave([bytes([1, 3, 5]), bytes([2, 4, 6])])
        b'\\x01\\x02\\x03\\x04\\x05\\x06'
    """
    if not streams:
        return b""

    length = len(streams[0])
    if any(len(s) != length for s in streams):
        raise ValueError("All streams must have the same length")

    result = bytearray()
    for i in range(length):
        for stream in streams:
            result.append(stream[i])

    return bytes(result)
