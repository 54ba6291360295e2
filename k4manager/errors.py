"""
Parse errors raised by the K4 codecs.

Composite codecs stop at the first error from any sub-block and let it
propagate; no partial patch is returned. The only thing a composite does
to an error on the way out is translate its offset into its own buffer.
"""

from contextlib import contextmanager
from typing import Iterator


class ParseError(Exception):
    """Base class for errors raised while decoding K4 System Exclusive data."""

    pass


class NotEnoughDataError(ParseError):
    """Raised when a buffer is shorter than the block it should contain."""

    def __init__(self, actual: int, required: int):
        self.actual = actual
        self.required = required
        super().__init__(f"Got {actual} bytes of data, expected {required} bytes")


class InvalidDataError(ParseError):
    """
    Raised when a byte holds a value with no valid mapping.

    The offset is relative to the start of the buffer handed to the codec
    that raised it. Misaligned slicing upstream usually shows up here first.
    """

    def __init__(self, offset: int, detail: str = ""):
        self.offset = offset
        self.detail = detail
        message = f"Invalid data at offset {offset}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UnidentifiedError(ParseError):
    """Raised when a SysEx message is not a recognised K4 dump."""

    pass


def require_length(data: bytes, required: int) -> None:
    """
    Check that a buffer holds at least ``required`` bytes.

    Raises:
        NotEnoughDataError: If the buffer is too short
    """
    if len(data) < required:
        raise NotEnoughDataError(len(data), required)


@contextmanager
def offset_context(base: int, stride: int = 1, lane: int = 0) -> Iterator[None]:
    """
    Translate InvalidDataError offsets raised by a sub-block codec.

    A sub-block sliced contiguously at ``base`` keeps stride 1. A sub-block
    de-interleaved from a wider stream maps its local byte ``i`` to
    ``base + i * stride + lane``.

    Example:
        with offset_context(30, stride=4, lane=2):
            source = Source.from_bytes(lanes[2])
    """
    try:
        yield
    except InvalidDataError as err:
        raise InvalidDataError(base + err.offset * stride + lane, err.detail) from err
