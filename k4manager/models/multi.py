"""
Multi patch data model.

A multi patch is a 77-byte block: name (M0-M9), volume (M10), effect
patch number (M11), eight 8-byte sections (M12-M75) and a checksum (M76).

Section layout:
    0: single patch number (0-63)
    1: zone low key
    2: zone high key
    3: bits 0-3 = receive channel, bits 4-5 = velocity switch, bit 6 = mute
    4: bits 0-2 = submix, bits 3-4 = play mode
    5: level
    6: transpose (offset 24)
    7: tune (offset 50)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from k4manager.constants import MULTI_PATCH_SIZE, NAME_LENGTH, SECTION_COUNT, SECTION_SIZE
from k4manager.errors import offset_context, require_length
from k4manager.models.name import PatchName
from k4manager.models.ranges import (
    CHANNEL,
    EFFECT_NUMBER,
    KEY,
    LEVEL,
    PATCH_NUMBER,
    TRANSPOSE,
    TUNE,
)
from k4manager.models.types import PlayMode, Submix, VelocitySwitch, note_name
from k4manager.utils.bits import bit_field, byte_from_bits, is_bit_set, set_bit
from k4manager.utils.checksum import add_checksum
from k4manager.utils.validation import collect_errors

logger = logging.getLogger(__name__)

SECTIONS_OFFSET = 12


@dataclass
class Section:
    """
    One section (layer) of a multi patch.

    Attributes:
        single_patch_number: Single patch played by this section (0-63)
        zone_low: Lowest key of the keyboard zone
        zone_high: Highest key of the keyboard zone
        channel: Receive channel (1-16)
        velocity_switch: Velocity range that triggers the section
        muted: Section is silenced
        submix: Output submix channel
        play_mode: Keyboard, MIDI or both
        level: Section level (0-100)
        transpose: Transpose in semitones (-24 to +24)
        tune: Fine tuning (-50 to +50)
    """

    single_patch_number: int = 0
    zone_low: int = 0
    zone_high: int = 127
    channel: int = 1
    velocity_switch: VelocitySwitch = VelocitySwitch.ALL
    muted: bool = False
    submix: Submix = Submix.A
    play_mode: PlayMode = PlayMode.KEYBOARD
    level: int = 100
    transpose: int = 0
    tune: int = 0

    DATA_SIZE = SECTION_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "Section":
        require_length(data, cls.DATA_SIZE)

        m15 = data[3]
        m16 = data[4]

        return cls(
            single_patch_number=PATCH_NUMBER.decode(data[0] & 0x7F),
            zone_low=KEY.decode(data[1] & 0x7F),
            zone_high=KEY.decode(data[2] & 0x7F),
            channel=CHANNEL.decode(bit_field(m15, 0, 4)),
            velocity_switch=VelocitySwitch.from_index(bit_field(m15, 4, 6), offset=3),
            muted=is_bit_set(m15, 6),
            submix=Submix.from_index(bit_field(m16, 0, 3), offset=4),
            play_mode=PlayMode.from_index(bit_field(m16, 3, 5), offset=4),
            level=LEVEL.decode(data[5] & 0x7F),
            transpose=TRANSPOSE.decode(data[6] & 0x7F),
            tune=TUNE.decode(data[7] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        m15 = byte_from_bits(CHANNEL.encode(self.channel), 0, 4)
        m15 = byte_from_bits(self.velocity_switch.to_index(), 4, 6, m15)
        if self.muted:
            m15 = set_bit(m15, 6)

        m16 = byte_from_bits(self.submix.to_index(), 0, 3)
        m16 = byte_from_bits(self.play_mode.to_index(), 3, 5, m16)

        return bytes(
            [
                PATCH_NUMBER.encode(self.single_patch_number),
                KEY.encode(self.zone_low),
                KEY.encode(self.zone_high),
                m15,
                m16,
                LEVEL.encode(self.level),
                TRANSPOSE.encode(self.transpose),
                TUNE.encode(self.tune),
            ]
        )

    @property
    def zone_name(self) -> str:
        """Keyboard zone as note names, e.g. 'C-1 - G9'."""
        return f"{note_name(self.zone_low)} - {note_name(self.zone_high)}"

    def range_checks(self, prefix: str = "") -> List[Tuple[str, int, int, int]]:
        return [
            (f"{prefix}single patch", self.single_patch_number, PATCH_NUMBER.low, PATCH_NUMBER.high),
            (f"{prefix}zone low", self.zone_low, KEY.low, KEY.high),
            (f"{prefix}zone high", self.zone_high, KEY.low, KEY.high),
            (f"{prefix}channel", self.channel, CHANNEL.low, CHANNEL.high),
            (f"{prefix}level", self.level, LEVEL.low, LEVEL.high),
            (f"{prefix}transpose", self.transpose, TRANSPOSE.low, TRANSPOSE.high),
            (f"{prefix}tune", self.tune, TUNE.low, TUNE.high),
        ]


def _default_sections() -> List[Section]:
    return [Section() for _ in range(SECTION_COUNT)]


@dataclass
class MultiPatch:
    """
    A K4 multi patch: eight sections, each playing a single patch.

    Attributes:
        name: Patch name (10 characters)
        volume: Multi volume (0-100)
        effect: Effect patch number (1-32)
        sections: Eight sections
    """

    name: PatchName = field(default_factory=lambda: PatchName("Multi"))
    volume: int = 100
    effect: int = 1
    sections: List[Section] = field(default_factory=_default_sections)

    DATA_SIZE = MULTI_PATCH_SIZE

    def __post_init__(self):
        if not isinstance(self.name, PatchName):
            self.name = PatchName(self.name)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MultiPatch":
        """
        Parse a multi patch block.

        Raises:
            NotEnoughDataError: If data is shorter than 77 bytes
            InvalidDataError: If a section holds an unmapped velocity switch
                or play mode
        """
        require_length(data, cls.DATA_SIZE)
        data = bytes(data[: cls.DATA_SIZE])

        sections = []
        for i in range(SECTION_COUNT):
            start = SECTIONS_OFFSET + i * SECTION_SIZE
            with offset_context(start):
                sections.append(Section.from_bytes(data[start : start + SECTION_SIZE]))

        patch = cls(
            name=PatchName.from_bytes(data[0:NAME_LENGTH]),
            volume=LEVEL.decode(data[10] & 0x7F),
            effect=EFFECT_NUMBER.decode(bit_field(data[11], 0, 5)),
            sections=sections,
        )
        logger.debug(f"Parsed multi patch '{patch.name.rstrip()}'")
        return patch

    def data(self) -> bytes:
        """Encode the patch without its checksum (M0-M75)."""
        result = bytearray(PatchName(self.name).to_bytes())
        result.append(LEVEL.encode(self.volume))
        result.append(EFFECT_NUMBER.encode(self.effect))
        for section in self.sections:
            result.extend(section.to_bytes())
        return bytes(result)

    def to_bytes(self) -> bytes:
        """Encode the complete 77-byte block, checksum included."""
        return add_checksum(self.data())

    def validate(self) -> List[str]:
        checks = [
            ("volume", self.volume, LEVEL.low, LEVEL.high),
            ("effect", self.effect, EFFECT_NUMBER.low, EFFECT_NUMBER.high),
        ]
        for i, section in enumerate(self.sections, 1):
            checks.extend(section.range_checks(f"section {i} "))

        errors = collect_errors(checks)
        if len(self.sections) != SECTION_COUNT:
            errors.append(f"Expected {SECTION_COUNT} sections, got {len(self.sections)}")
        return errors
