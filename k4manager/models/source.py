"""
Source (DCO + source common) settings of a single patch.

A single patch has four sources. On the wire their 7 bytes are
interleaved with each other (see k4manager.utils.interleave); the codec
here works on one source's de-interleaved bytes:

    0: delay (0-100)
    1: bit 0 = wave select MSB, bits 4-6 = key scaling curve
    2: wave select LSB (7 bits)
    3: bits 0-5 = coarse (offset 24), bit 6 = key track
    4: fixed key (0-127)
    5: fine (offset 50)
    6: bit 0 = pressure > frequency, bit 1 = vibrato / auto bend,
       bits 2-4 = velocity curve
"""

from dataclasses import dataclass
from typing import List, Tuple

from k4manager.errors import require_length
from k4manager.models.ranges import COARSE, FINE, KEY, LEVEL, WAVE_NUMBER
from k4manager.models.types import KeyScalingCurve, VelocityCurve, note_name
from k4manager.utils.bits import (
    bit_field,
    byte_from_bits,
    is_bit_set,
    join_wave_number,
    set_bit,
    split_wave_number,
)


@dataclass
class Source:
    """
    One of the four sources of a single patch.

    Attributes:
        delay: Source delay (0-100)
        wave_number: PCM wave (1-256)
        key_scaling_curve: Key scaling curve 1-8
        key_track: Whether pitch follows the keyboard
        coarse: Coarse tuning in semitones (-24 to +24)
        fixed_key: Key used when key tracking is off (0-127)
        fine: Fine tuning (-50 to +50)
        pressure_frequency: Pressure controls pitch
        vibrato: Vibrato and auto bend enabled
        velocity_curve: Velocity curve 1-8
    """

    delay: int = 0
    wave_number: int = 10
    key_scaling_curve: KeyScalingCurve = KeyScalingCurve.CURVE1
    key_track: bool = True
    coarse: int = 0
    fixed_key: int = 60
    fine: int = 0
    pressure_frequency: bool = True
    vibrato: bool = True
    velocity_curve: VelocityCurve = VelocityCurve.CURVE1

    DATA_SIZE = 7

    @classmethod
    def from_bytes(cls, data: bytes) -> "Source":
        """
        Parse one source from its de-interleaved bytes.

        Raises:
            NotEnoughDataError: If fewer than 7 bytes are given
        """
        require_length(data, cls.DATA_SIZE)

        return cls(
            delay=LEVEL.decode(data[0] & 0x7F),
            wave_number=join_wave_number(data[1] & 0x01, data[2]),
            key_scaling_curve=KeyScalingCurve.from_index(bit_field(data[1], 4, 7), offset=1),
            key_track=is_bit_set(data[3], 6),
            coarse=COARSE.decode(data[3] & 0x3F),
            fixed_key=KEY.decode(data[4] & 0x7F),
            fine=FINE.decode(data[5] & 0x7F),
            pressure_frequency=is_bit_set(data[6], 0),
            vibrato=is_bit_set(data[6], 1),
            velocity_curve=VelocityCurve.from_index(bit_field(data[6], 2, 5), offset=6),
        )

    def to_bytes(self) -> bytes:
        msb, lsb = split_wave_number(self.wave_number)

        wave_high = byte_from_bits(self.key_scaling_curve.to_index(), 4, 7, msb)

        coarse = byte_from_bits(COARSE.encode(self.coarse), 0, 6)
        if self.key_track:
            coarse = set_bit(coarse, 6)

        switches = byte_from_bits(self.velocity_curve.to_index(), 2, 5)
        if self.pressure_frequency:
            switches = set_bit(switches, 0)
        if self.vibrato:
            switches = set_bit(switches, 1)

        return bytes(
            [
                LEVEL.encode(self.delay),
                wave_high,
                lsb,
                coarse,
                KEY.encode(self.fixed_key),
                FINE.encode(self.fine),
                switches,
            ]
        )

    @property
    def fixed_key_name(self) -> str:
        """Fixed key as a note name, e.g. 'C4'."""
        return note_name(self.fixed_key)

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}delay", self.delay, LEVEL.low, LEVEL.high),
            (f"{prefix}wave number", self.wave_number, WAVE_NUMBER.low, WAVE_NUMBER.high),
            (f"{prefix}coarse", self.coarse, COARSE.low, COARSE.high),
            (f"{prefix}fixed key", self.fixed_key, KEY.low, KEY.high),
            (f"{prefix}fine", self.fine, FINE.low, FINE.high),
        ]
