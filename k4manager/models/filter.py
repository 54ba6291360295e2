"""
Filter (DCF) settings of a single patch.

A single patch has two filters, one for sources 1+2 and one for 3+4.
De-interleaved layout (14 bytes):
    0: cutoff (0-100)
    1: bits 0-2 = resonance (0-7), bit 3 = LFO modulates cutoff
    2-4: cutoff modulation (velocity, pressure, key scaling)
    5: envelope depth (offset 50)
    6: envelope velocity depth (offset 50)
    7-10: envelope attack, decay, sustain, release
    11-13: time modulation (attack velocity, release velocity, key scaling)
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from k4manager.errors import offset_context, require_length
from k4manager.models.envelope import FilterEnvelope
from k4manager.models.modulation import LevelModulation, TimeModulation
from k4manager.models.ranges import DEPTH, LEVEL, RESONANCE
from k4manager.utils.bits import bit_field, byte_from_bits, is_bit_set, set_bit


@dataclass
class Filter:
    """
    One of the two filters of a single patch.

    Attributes:
        cutoff: Cutoff frequency (0-100)
        resonance: Resonance as stored on the wire (0-7)
        lfo_modulates_cutoff: LFO routed to cutoff
        cutoff_modulation: Velocity, pressure and key scaling of the cutoff
        envelope_depth: Envelope depth (-50 to +50)
        envelope_velocity_depth: Velocity control of envelope depth (-50 to +50)
        envelope: Filter envelope
        time_modulation: Envelope time modulation
    """

    cutoff: int = 100
    resonance: int = 0
    lfo_modulates_cutoff: bool = False
    cutoff_modulation: LevelModulation = field(default_factory=LevelModulation)
    envelope_depth: int = 0
    envelope_velocity_depth: int = 0
    envelope: FilterEnvelope = field(default_factory=FilterEnvelope)
    time_modulation: TimeModulation = field(default_factory=TimeModulation)

    DATA_SIZE = 14

    @classmethod
    def from_bytes(cls, data: bytes) -> "Filter":
        require_length(data, cls.DATA_SIZE)

        with offset_context(2):
            cutoff_modulation = LevelModulation.from_bytes(data[2:5])
        with offset_context(7):
            envelope = FilterEnvelope.from_bytes(data[7:11])
        with offset_context(11):
            time_modulation = TimeModulation.from_bytes(data[11:14])

        return cls(
            cutoff=LEVEL.decode(data[0] & 0x7F),
            resonance=bit_field(data[1], 0, 3),
            lfo_modulates_cutoff=is_bit_set(data[1], 3),
            cutoff_modulation=cutoff_modulation,
            envelope_depth=DEPTH.decode(data[5] & 0x7F),
            envelope_velocity_depth=DEPTH.decode(data[6] & 0x7F),
            envelope=envelope,
            time_modulation=time_modulation,
        )

    def to_bytes(self) -> bytes:
        resonance = byte_from_bits(RESONANCE.encode(self.resonance), 0, 3)
        if self.lfo_modulates_cutoff:
            resonance = set_bit(resonance, 3)

        return (
            bytes([LEVEL.encode(self.cutoff), resonance])
            + self.cutoff_modulation.to_bytes()
            + bytes(
                [
                    DEPTH.encode(self.envelope_depth),
                    DEPTH.encode(self.envelope_velocity_depth),
                ]
            )
            + self.envelope.to_bytes()
            + self.time_modulation.to_bytes()
        )

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        checks = [
            (f"{prefix}cutoff", self.cutoff, LEVEL.low, LEVEL.high),
            (f"{prefix}resonance", self.resonance, RESONANCE.low, RESONANCE.high),
            (f"{prefix}envelope depth", self.envelope_depth, DEPTH.low, DEPTH.high),
            (
                f"{prefix}envelope velocity depth",
                self.envelope_velocity_depth,
                DEPTH.low,
                DEPTH.high,
            ),
        ]
        checks.extend(self.cutoff_modulation.range_checks(f"{prefix}cutoff mod "))
        checks.extend(self.envelope.range_checks(f"{prefix}envelope "))
        checks.extend(self.time_modulation.range_checks(f"{prefix}time mod "))
        return checks
