"""
LFO and vibrato settings of a single patch.

The LFO occupies five contiguous bytes (s24-s28). The vibrato is spread
over the common section: its shape shares s14 with the source mute bits,
the speed is s16, and the two depths are s22 and s23. SinglePatch gathers
those four bytes and hands them to Vibrato in that order.
"""

from dataclasses import dataclass
from typing import List, Tuple

from k4manager.errors import require_length
from k4manager.models.ranges import DEPTH, LEVEL
from k4manager.models.types import LFOShape
from k4manager.utils.bits import bit_field, byte_from_bits


@dataclass
class LFO:
    """
    LFO settings.

    Attributes:
        shape: Waveform
        speed: 0-100
        delay: 0-100
        depth: -50 to +50
        pressure_depth: -50 to +50
    """

    shape: LFOShape = LFOShape.TRIANGLE
    speed: int = 0
    delay: int = 0
    depth: int = 0
    pressure_depth: int = 0

    DATA_SIZE = 5

    @classmethod
    def from_bytes(cls, data: bytes) -> "LFO":
        require_length(data, cls.DATA_SIZE)
        return cls(
            shape=LFOShape.from_index(bit_field(data[0], 0, 2), offset=0),
            speed=LEVEL.decode(data[1] & 0x7F),
            delay=LEVEL.decode(data[2] & 0x7F),
            depth=DEPTH.decode(data[3] & 0x7F),
            pressure_depth=DEPTH.decode(data[4] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                self.shape.to_index(),
                LEVEL.encode(self.speed),
                LEVEL.encode(self.delay),
                DEPTH.encode(self.depth),
                DEPTH.encode(self.pressure_depth),
            ]
        )

    def range_checks(self, prefix: str = "LFO ") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}speed", self.speed, LEVEL.low, LEVEL.high),
            (f"{prefix}delay", self.delay, LEVEL.low, LEVEL.high),
            (f"{prefix}depth", self.depth, DEPTH.low, DEPTH.high),
            (f"{prefix}pressure depth", self.pressure_depth, DEPTH.low, DEPTH.high),
        ]


@dataclass
class Vibrato:
    """
    Vibrato settings.

    Wire bytes, in the order SinglePatch gathers them:
        0: s14 bits 4-5 = shape (bits 0-3 belong to the source mute mask)
        1: s16 speed
        2: s22 pressure depth (offset 50)
        3: s23 depth (offset 50)
    """

    shape: LFOShape = LFOShape.TRIANGLE
    speed: int = 0
    depth: int = 0
    pressure_depth: int = 0

    DATA_SIZE = 4

    @classmethod
    def from_bytes(cls, data: bytes) -> "Vibrato":
        require_length(data, cls.DATA_SIZE)
        return cls(
            shape=LFOShape.from_index(bit_field(data[0], 4, 6), offset=0),
            speed=LEVEL.decode(data[1] & 0x7F),
            pressure_depth=DEPTH.decode(data[2] & 0x7F),
            depth=DEPTH.decode(data[3] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        """Encode in gather order; byte 0 carries only the shape bits."""
        return bytes(
            [
                byte_from_bits(self.shape.to_index(), 4, 6),
                LEVEL.encode(self.speed),
                DEPTH.encode(self.pressure_depth),
                DEPTH.encode(self.depth),
            ]
        )

    def range_checks(self, prefix: str = "vibrato ") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}speed", self.speed, LEVEL.low, LEVEL.high),
            (f"{prefix}depth", self.depth, DEPTH.low, DEPTH.high),
            (f"{prefix}pressure depth", self.pressure_depth, DEPTH.low, DEPTH.high),
        ]
