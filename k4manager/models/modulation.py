"""
Modulation blocks shared by amplifiers, filters and the single common section.

All fields are signed depths stored with offset 50, one byte each, in the
declared order. There is no bit packing in these blocks.
"""

from dataclasses import dataclass
from typing import List, Tuple

from k4manager.errors import require_length
from k4manager.models.ranges import DEPTH, LEVEL

RangeCheck = Tuple[str, int, int, int]


@dataclass
class LevelModulation:
    """
    Level modulation (velocity, pressure and key scaling depth).

    Used for amplifier level and filter cutoff. Each depth is -50 to +50.
    """

    velocity_depth: int = 0
    pressure_depth: int = 0
    key_scaling_depth: int = 0

    DATA_SIZE = 3

    @classmethod
    def from_bytes(cls, data: bytes) -> "LevelModulation":
        require_length(data, cls.DATA_SIZE)
        return cls(
            velocity_depth=DEPTH.decode(data[0] & 0x7F),
            pressure_depth=DEPTH.decode(data[1] & 0x7F),
            key_scaling_depth=DEPTH.decode(data[2] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                DEPTH.encode(self.velocity_depth),
                DEPTH.encode(self.pressure_depth),
                DEPTH.encode(self.key_scaling_depth),
            ]
        )

    def range_checks(self, prefix: str = "") -> List[RangeCheck]:
        return [
            (f"{prefix}velocity depth", self.velocity_depth, DEPTH.low, DEPTH.high),
            (f"{prefix}pressure depth", self.pressure_depth, DEPTH.low, DEPTH.high),
            (f"{prefix}key scaling depth", self.key_scaling_depth, DEPTH.low, DEPTH.high),
        ]


@dataclass
class TimeModulation:
    """Envelope time modulation (attack velocity, release velocity, key scaling)."""

    attack_velocity: int = 0
    release_velocity: int = 0
    key_scaling: int = 0

    DATA_SIZE = 3

    @classmethod
    def from_bytes(cls, data: bytes) -> "TimeModulation":
        require_length(data, cls.DATA_SIZE)
        return cls(
            attack_velocity=DEPTH.decode(data[0] & 0x7F),
            release_velocity=DEPTH.decode(data[1] & 0x7F),
            key_scaling=DEPTH.decode(data[2] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                DEPTH.encode(self.attack_velocity),
                DEPTH.encode(self.release_velocity),
                DEPTH.encode(self.key_scaling),
            ]
        )

    def range_checks(self, prefix: str = "") -> List[RangeCheck]:
        return [
            (f"{prefix}attack velocity", self.attack_velocity, DEPTH.low, DEPTH.high),
            (f"{prefix}release velocity", self.release_velocity, DEPTH.low, DEPTH.high),
            (f"{prefix}key scaling", self.key_scaling, DEPTH.low, DEPTH.high),
        ]


@dataclass
class AutoBend:
    """
    Auto bend settings of a single patch (s18-s21).

    Attributes:
        time: Bend time (0-100)
        depth: Bend depth (-50 to +50)
        key_scaling_time: Key scaling of the time (-50 to +50)
        velocity_depth: Velocity control of the depth (-50 to +50)
    """

    time: int = 0
    depth: int = 0
    key_scaling_time: int = 0
    velocity_depth: int = 0

    DATA_SIZE = 4

    @classmethod
    def from_bytes(cls, data: bytes) -> "AutoBend":
        require_length(data, cls.DATA_SIZE)
        return cls(
            time=LEVEL.decode(data[0] & 0x7F),
            depth=DEPTH.decode(data[1] & 0x7F),
            key_scaling_time=DEPTH.decode(data[2] & 0x7F),
            velocity_depth=DEPTH.decode(data[3] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                LEVEL.encode(self.time),
                DEPTH.encode(self.depth),
                DEPTH.encode(self.key_scaling_time),
                DEPTH.encode(self.velocity_depth),
            ]
        )

    def range_checks(self, prefix: str = "") -> List[RangeCheck]:
        return [
            (f"{prefix}auto bend time", self.time, LEVEL.low, LEVEL.high),
            (f"{prefix}auto bend depth", self.depth, DEPTH.low, DEPTH.high),
            (f"{prefix}auto bend KS time", self.key_scaling_time, DEPTH.low, DEPTH.high),
            (f"{prefix}auto bend velocity depth", self.velocity_depth, DEPTH.low, DEPTH.high),
        ]
