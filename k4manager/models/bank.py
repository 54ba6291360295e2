"""
Bank data model.

A bank holds the complete memory of the instrument (or of a RAM card):
64 single patches, 64 multi patches, the drum kit and 32 effect patches,
stored back to back in that order in a 15,114-byte payload.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from k4manager.constants import (
    BANK_SIZE,
    DRUM_COMMON_SIZE,
    DRUM_NOTE_COUNT,
    DRUM_NOTE_SIZE,
    DRUM_SIZE,
    EFFECT_PATCH_COUNT,
    EFFECT_PATCH_SIZE,
    MULTI_PATCH_COUNT,
    MULTI_PATCH_SIZE,
    SINGLE_PATCH_COUNT,
    SINGLE_PATCH_SIZE,
)
from k4manager.errors import offset_context, require_length
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch
from k4manager.models.multi import MultiPatch
from k4manager.models.single import SinglePatch

logger = logging.getLogger(__name__)

MULTIS_OFFSET = SINGLE_PATCH_COUNT * SINGLE_PATCH_SIZE  # 8384
DRUM_OFFSET = MULTIS_OFFSET + MULTI_PATCH_COUNT * MULTI_PATCH_SIZE  # 13312
EFFECTS_OFFSET = DRUM_OFFSET + DRUM_SIZE  # 13994

PATCHES_PER_GROUP = 16
GROUP_LETTERS = "ABCD"


def iter_blocks(size: int = BANK_SIZE, base: int = 0) -> Iterator[Tuple[str, int, int]]:
    """
    Enumerate the checksummed blocks of a bank payload.

    Args:
        size: Payload size; only complete bank payloads are enumerated
        base: Offset added to every block start

    Yields:
        (label, start, length) for every block, in payload order
    """
    if size < BANK_SIZE:
        return

    for i in range(SINGLE_PATCH_COUNT):
        yield f"single {Bank.patch_name_for(i)}", base + i * SINGLE_PATCH_SIZE, SINGLE_PATCH_SIZE
    for i in range(MULTI_PATCH_COUNT):
        start = base + MULTIS_OFFSET + i * MULTI_PATCH_SIZE
        yield f"multi {Bank.patch_name_for(i)}", start, MULTI_PATCH_SIZE
    yield "drum common", base + DRUM_OFFSET, DRUM_COMMON_SIZE
    for i in range(DRUM_NOTE_COUNT):
        start = base + DRUM_OFFSET + DRUM_COMMON_SIZE + i * DRUM_NOTE_SIZE
        yield f"drum note {Drum.note_name_for(i)}", start, DRUM_NOTE_SIZE
    for i in range(EFFECT_PATCH_COUNT):
        start = base + EFFECTS_OFFSET + i * EFFECT_PATCH_SIZE
        yield f"effect {i + 1}", start, EFFECT_PATCH_SIZE


@dataclass
class Bank:
    """
    A full K4 bank.

    Attributes:
        singles: 64 single patches (A-1 to D-16)
        multis: 64 multi patches (A-1 to D-16)
        drum: The drum kit
        effects: 32 effect patches (1-32)
    """

    singles: List[SinglePatch] = field(
        default_factory=lambda: [SinglePatch() for _ in range(SINGLE_PATCH_COUNT)]
    )
    multis: List[MultiPatch] = field(
        default_factory=lambda: [MultiPatch() for _ in range(MULTI_PATCH_COUNT)]
    )
    drum: Drum = field(default_factory=Drum)
    effects: List[EffectPatch] = field(
        default_factory=lambda: [EffectPatch() for _ in range(EFFECT_PATCH_COUNT)]
    )

    DATA_SIZE = BANK_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "Bank":
        """
        Parse a bank payload (the bytes between the header and F7).

        The first error from any patch is raised with its offset
        translated into the payload; no partial bank is returned.

        Raises:
            NotEnoughDataError: If data is shorter than 15,114 bytes
            InvalidDataError: If any patch holds an unmapped value
        """
        require_length(data, cls.DATA_SIZE)
        data = bytes(data)

        singles = []
        for i in range(SINGLE_PATCH_COUNT):
            start = i * SINGLE_PATCH_SIZE
            with offset_context(start):
                singles.append(SinglePatch.from_bytes(data[start : start + SINGLE_PATCH_SIZE]))

        multis = []
        for i in range(MULTI_PATCH_COUNT):
            start = MULTIS_OFFSET + i * MULTI_PATCH_SIZE
            with offset_context(start):
                multis.append(MultiPatch.from_bytes(data[start : start + MULTI_PATCH_SIZE]))

        with offset_context(DRUM_OFFSET):
            drum = Drum.from_bytes(data[DRUM_OFFSET:EFFECTS_OFFSET])

        effects = []
        for i in range(EFFECT_PATCH_COUNT):
            start = EFFECTS_OFFSET + i * EFFECT_PATCH_SIZE
            with offset_context(start):
                effects.append(EffectPatch.from_bytes(data[start : start + EFFECT_PATCH_SIZE]))

        logger.debug(
            f"Parsed bank: {len(singles)} singles, {len(multis)} multis, "
            f"{len(drum.notes)} drum notes, {len(effects)} effects"
        )
        return cls(singles=singles, multis=multis, drum=drum, effects=effects)

    def to_bytes(self) -> bytes:
        """
        Encode the bank payload.

        Every block carries its own freshly computed checksum.
        """
        result = bytearray()
        for single in self.singles:
            result.extend(single.to_bytes())
        for multi in self.multis:
            result.extend(multi.to_bytes())
        result.extend(self.drum.to_bytes())
        for effect in self.effects:
            result.extend(effect.to_bytes())
        return bytes(result)

    @staticmethod
    def patch_name_for(number: int) -> str:
        """
        Get the front panel name of a patch slot.

        Example:
            >>> Bank.patch_name_for(0)
            'A-1'
            >>> Bank.patch_name_for(63)
            'D-16'
        """
        if not 0 <= number < SINGLE_PATCH_COUNT:
            raise ValueError(f"Patch number must be 0-63, got {number}")
        group = GROUP_LETTERS[number // PATCHES_PER_GROUP]
        return f"{group}-{number % PATCHES_PER_GROUP + 1}"

    @staticmethod
    def patch_number_for(name: str) -> int:
        """
        Get the patch number of a front panel slot name like 'B-3'.

        Raises:
            ValueError: If the name is not a slot name
        """
        group, _, index = name.strip().upper().partition("-")
        if group not in GROUP_LETTERS or len(group) != 1 or not index.isdigit():
            raise ValueError(f"Invalid patch slot name: {name}")
        position = int(index)
        if not 1 <= position <= PATCHES_PER_GROUP:
            raise ValueError(f"Invalid patch slot name: {name}")
        return GROUP_LETTERS.index(group) * PATCHES_PER_GROUP + position - 1

    def validate(self) -> List[str]:
        """Validate every patch, prefixing each message with its slot."""
        errors = []
        for i, single in enumerate(self.singles):
            errors.extend(f"single {self.patch_name_for(i)}: {e}" for e in single.validate())
        for i, multi in enumerate(self.multis):
            errors.extend(f"multi {self.patch_name_for(i)}: {e}" for e in multi.validate())
        errors.extend(f"drum: {e}" for e in self.drum.validate())
        for i, effect in enumerate(self.effects, 1):
            errors.extend(f"effect {i}: {e}" for e in effect.validate())
        return errors
