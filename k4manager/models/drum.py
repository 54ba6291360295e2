"""
Drum data model.

The drum kit is a 682-byte region: an 11-byte common block followed by
61 note blocks of 11 bytes (MIDI keys 36 to 96). Every block ends with its own
checksum.

Common block:
    0: receive channel (0-based on the wire)
    1: volume
    2: velocity depth (offset 50)
    3-9: unused, always zero
    10: checksum

Note block (the two sources are interleaved over bytes 0-9):
    0: bits 4-6 = submix, bit 0 = S1 wave MSB
    1: bit 0 = S2 wave MSB
    2/3: S1/S2 wave LSB
    4/5: S1/S2 decay
    6/7: S1/S2 tune (offset 50)
    8/9: S1/S2 level
    10: checksum

Drum waves use their own two-byte split; the submix bits that share the
S1 MSB byte are masked away before the wave number is joined.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from k4manager.constants import DRUM_COMMON_SIZE, DRUM_NOTE_COUNT, DRUM_NOTE_SIZE, DRUM_SIZE
from k4manager.errors import offset_context, require_length
from k4manager.models.ranges import CHANNEL, DEPTH, LEVEL, TUNE, WAVE_NUMBER
from k4manager.models.types import Submix, note_name
from k4manager.utils.bits import bit_field, join_wave_number, split_wave_number
from k4manager.utils.checksum import add_checksum
from k4manager.utils.interleave import deinterleave, interleave
from k4manager.utils.validation import collect_errors

logger = logging.getLogger(__name__)

FIRST_NOTE_KEY = 36
RESERVED_SIZE = 7


@dataclass
class DrumSource:
    """
    One of the two sources of a drum note.

    De-interleaved layout: wave MSB, wave LSB, decay, tune, level.
    """

    wave_number: int = 97
    decay: int = 0
    tune: int = 0
    level: int = 100

    DATA_SIZE = 5

    @classmethod
    def from_bytes(cls, data: bytes) -> "DrumSource":
        require_length(data, cls.DATA_SIZE)
        return cls(
            wave_number=join_wave_number(data[0] & 0x01, data[1]),
            decay=LEVEL.decode(data[2] & 0x7F),
            tune=TUNE.decode(data[3] & 0x7F),
            level=LEVEL.decode(data[4] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        msb, lsb = split_wave_number(self.wave_number)
        return bytes(
            [msb, lsb, LEVEL.encode(self.decay), TUNE.encode(self.tune), LEVEL.encode(self.level)]
        )

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}wave number", self.wave_number, WAVE_NUMBER.low, WAVE_NUMBER.high),
            (f"{prefix}decay", self.decay, LEVEL.low, LEVEL.high),
            (f"{prefix}tune", self.tune, TUNE.low, TUNE.high),
            (f"{prefix}level", self.level, LEVEL.low, LEVEL.high),
        ]


@dataclass
class DrumCommon:
    """Drum settings shared by all notes."""

    channel: int = 10
    volume: int = 100
    velocity_depth: int = 0

    DATA_SIZE = DRUM_COMMON_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "DrumCommon":
        require_length(data, cls.DATA_SIZE)
        return cls(
            channel=CHANNEL.decode(data[0] & 0x0F),
            volume=LEVEL.decode(data[1] & 0x7F),
            velocity_depth=DEPTH.decode(data[2] & 0x7F),
        )

    def data(self) -> bytes:
        return bytes(
            [
                CHANNEL.encode(self.channel),
                LEVEL.encode(self.volume),
                DEPTH.encode(self.velocity_depth),
            ]
        ) + bytes(RESERVED_SIZE)

    def to_bytes(self) -> bytes:
        return add_checksum(self.data())


@dataclass
class DrumNote:
    """
    Settings of one drum key.

    Attributes:
        submix: Output submix channel
        source1: First drum source
        source2: Second drum source
    """

    submix: Submix = Submix.A
    source1: DrumSource = field(default_factory=DrumSource)
    source2: DrumSource = field(default_factory=DrumSource)

    DATA_SIZE = DRUM_NOTE_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "DrumNote":
        require_length(data, cls.DATA_SIZE)

        lanes = deinterleave(bytes(data[0:10]), 2)
        with offset_context(0, stride=2, lane=0):
            source1 = DrumSource.from_bytes(lanes[0])
        with offset_context(0, stride=2, lane=1):
            source2 = DrumSource.from_bytes(lanes[1])

        return cls(
            submix=Submix.from_index(bit_field(data[0], 4, 7), offset=0),
            source1=source1,
            source2=source2,
        )

    def data(self) -> bytes:
        result = bytearray(interleave([self.source1.to_bytes(), self.source2.to_bytes()]))
        result[0] |= self.submix.to_index() << 4
        return bytes(result)

    def to_bytes(self) -> bytes:
        return add_checksum(self.data())


def _default_notes() -> List[DrumNote]:
    return [DrumNote() for _ in range(DRUM_NOTE_COUNT)]


@dataclass
class Drum:
    """The drum kit: common settings and 61 notes, one per key from 36 up."""

    common: DrumCommon = field(default_factory=DrumCommon)
    notes: List[DrumNote] = field(default_factory=_default_notes)

    DATA_SIZE = DRUM_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "Drum":
        """
        Parse the drum region.

        Raises:
            NotEnoughDataError: If data is shorter than 682 bytes
        """
        require_length(data, cls.DATA_SIZE)
        data = bytes(data[: cls.DATA_SIZE])

        common = DrumCommon.from_bytes(data[0:DRUM_COMMON_SIZE])

        notes = []
        for i in range(DRUM_NOTE_COUNT):
            start = DRUM_COMMON_SIZE + i * DRUM_NOTE_SIZE
            with offset_context(start):
                notes.append(DrumNote.from_bytes(data[start : start + DRUM_NOTE_SIZE]))

        logger.debug(f"Parsed drum with {len(notes)} notes on channel {common.channel}")
        return cls(common=common, notes=notes)

    def to_bytes(self) -> bytes:
        """Encode the common block and every note, each with its own checksum."""
        result = bytearray(self.common.to_bytes())
        for note in self.notes:
            result.extend(note.to_bytes())
        return bytes(result)

    @staticmethod
    def key_for_note(index: int) -> int:
        """MIDI key number of note ``index``."""
        return FIRST_NOTE_KEY + index

    @staticmethod
    def note_name_for(index: int) -> str:
        return note_name(FIRST_NOTE_KEY + index)

    def validate(self) -> List[str]:
        checks = [
            ("channel", self.common.channel, CHANNEL.low, CHANNEL.high),
            ("volume", self.common.volume, LEVEL.low, LEVEL.high),
            ("velocity depth", self.common.velocity_depth, DEPTH.low, DEPTH.high),
        ]
        for i, note in enumerate(self.notes):
            name = self.note_name_for(i)
            checks.extend(note.source1.range_checks(f"{name} S1 "))
            checks.extend(note.source2.range_checks(f"{name} S2 "))

        errors = collect_errors(checks)
        if len(self.notes) != DRUM_NOTE_COUNT:
            errors.append(f"Expected {DRUM_NOTE_COUNT} notes, got {len(self.notes)}")
        return errors
