"""
Amplifier (DCA) and filter (DCF) envelopes.

The two envelopes share a 4-byte ADSR layout but not their sustain
semantics: the amplifier sustain is an unsigned level (0-100), while the
filter sustain is a signed depth (-50 to +50, wire offset 50). The
instrument's MIDI implementation lists the filter sustain as 0~100; real
dumps show it is signed.
"""

from dataclasses import dataclass
from typing import List, Tuple

from k4manager.errors import require_length
from k4manager.models.ranges import DEPTH, LEVEL


@dataclass
class AmplifierEnvelope:
    """DCA envelope. All four values are levels 0-100."""

    attack: int = 0
    decay: int = 50
    sustain: int = 0
    release: int = 50

    DATA_SIZE = 4

    @classmethod
    def from_bytes(cls, data: bytes) -> "AmplifierEnvelope":
        require_length(data, cls.DATA_SIZE)
        return cls(
            attack=LEVEL.decode(data[0] & 0x7F),
            decay=LEVEL.decode(data[1] & 0x7F),
            sustain=LEVEL.decode(data[2] & 0x7F),
            release=LEVEL.decode(data[3] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                LEVEL.encode(self.attack),
                LEVEL.encode(self.decay),
                LEVEL.encode(self.sustain),
                LEVEL.encode(self.release),
            ]
        )

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}{name}", value, LEVEL.low, LEVEL.high)
            for name, value in (
                ("attack", self.attack),
                ("decay", self.decay),
                ("sustain", self.sustain),
                ("release", self.release),
            )
        ]


@dataclass
class FilterEnvelope:
    """DCF envelope. Attack, decay and release are levels; sustain is a depth."""

    attack: int = 0
    decay: int = 50
    sustain: int = 0
    release: int = 50

    DATA_SIZE = 4

    @classmethod
    def from_bytes(cls, data: bytes) -> "FilterEnvelope":
        require_length(data, cls.DATA_SIZE)
        return cls(
            attack=LEVEL.decode(data[0] & 0x7F),
            decay=LEVEL.decode(data[1] & 0x7F),
            sustain=DEPTH.decode(data[2] & 0x7F),
            release=LEVEL.decode(data[3] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                LEVEL.encode(self.attack),
                LEVEL.encode(self.decay),
                DEPTH.encode(self.sustain),
                LEVEL.encode(self.release),
            ]
        )

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}attack", self.attack, LEVEL.low, LEVEL.high),
            (f"{prefix}decay", self.decay, LEVEL.low, LEVEL.high),
            (f"{prefix}sustain", self.sustain, DEPTH.low, DEPTH.high),
            (f"{prefix}release", self.release, LEVEL.low, LEVEL.high),
        ]
