"""
Amplifier (DCA) settings of a single patch.

De-interleaved layout (11 bytes):
    0: envelope level
    1-4: envelope attack, decay, sustain, release
    5-7: level modulation (velocity, pressure, key scaling)
    8-10: time modulation (attack velocity, release velocity, key scaling)
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from k4manager.errors import offset_context, require_length
from k4manager.models.envelope import AmplifierEnvelope
from k4manager.models.modulation import LevelModulation, TimeModulation
from k4manager.models.ranges import LEVEL


@dataclass
class Amplifier:
    """One of the four amplifiers of a single patch."""

    level: int = 100
    envelope: AmplifierEnvelope = field(default_factory=AmplifierEnvelope)
    level_modulation: LevelModulation = field(default_factory=LevelModulation)
    time_modulation: TimeModulation = field(default_factory=TimeModulation)

    DATA_SIZE = 11

    @classmethod
    def from_bytes(cls, data: bytes) -> "Amplifier":
        require_length(data, cls.DATA_SIZE)

        with offset_context(1):
            envelope = AmplifierEnvelope.from_bytes(data[1:5])
        with offset_context(5):
            level_modulation = LevelModulation.from_bytes(data[5:8])
        with offset_context(8):
            time_modulation = TimeModulation.from_bytes(data[8:11])

        return cls(
            level=LEVEL.decode(data[0] & 0x7F),
            envelope=envelope,
            level_modulation=level_modulation,
            time_modulation=time_modulation,
        )

    def to_bytes(self) -> bytes:
        return (
            bytes([LEVEL.encode(self.level)])
            + self.envelope.to_bytes()
            + self.level_modulation.to_bytes()
            + self.time_modulation.to_bytes()
        )

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        checks = [(f"{prefix}level", self.level, LEVEL.low, LEVEL.high)]
        checks.extend(self.envelope.range_checks(f"{prefix}envelope "))
        checks.extend(self.level_modulation.range_checks(f"{prefix}level mod "))
        checks.extend(self.time_modulation.range_checks(f"{prefix}time mod "))
        return checks
