"""
Effect patch data model.

An effect patch is a 35-byte block:

    0: effect type (0-15 on the wire, types 1-16)
    1-3: effect parameters 1-3
    4-9: unused, emitted as zero
    10-33: eight submix settings of 3 bytes (pan, send 1, send 2)
    34: checksum
"""

import logging
from dataclasses import dataclass, field
from typing import List

from k4manager.constants import EFFECT_PATCH_SIZE, SUBMIX_COUNT
from k4manager.errors import offset_context, require_length
from k4manager.models.ranges import EFFECT_PARAM_LARGE, EFFECT_PARAM_SMALL, PAN, SEND
from k4manager.models.types import EffectType, Submix
from k4manager.utils.checksum import add_checksum
from k4manager.utils.validation import collect_errors, validate_wire_byte

logger = logging.getLogger(__name__)

SUBMIXES_OFFSET = 10
RESERVED_SIZE = 6


@dataclass
class SubmixSettings:
    """
    Pan and effect sends of one submix channel.

    Attributes:
        pan: Pan position (-7 to +7)
        send1: Effect send 1 (0-100)
        send2: Effect send 2 (0-100)
    """

    pan: int = 0
    send1: int = 50
    send2: int = 50

    DATA_SIZE = 3

    @classmethod
    def from_bytes(cls, data: bytes) -> "SubmixSettings":
        require_length(data, cls.DATA_SIZE)
        return cls(
            pan=PAN.decode(data[0] & 0x7F),
            send1=SEND.decode(data[1] & 0x7F),
            send2=SEND.decode(data[2] & 0x7F),
        )

    def to_bytes(self) -> bytes:
        return bytes([PAN.encode(self.pan), SEND.encode(self.send1), SEND.encode(self.send2)])


def _default_submixes() -> List[SubmixSettings]:
    return [SubmixSettings() for _ in range(SUBMIX_COUNT)]


@dataclass
class EffectPatch:
    """
    A K4 effect patch.

    The meaning of the three parameters depends on the effect type;
    parameters 1 and 2 range 0-7, parameter 3 ranges 0-31.
    """

    effect_type: EffectType = EffectType.REVERB_1
    param1: int = 0
    param2: int = 3
    param3: int = 16
    submixes: List[SubmixSettings] = field(default_factory=_default_submixes)

    DATA_SIZE = EFFECT_PATCH_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "EffectPatch":
        """
        Parse an effect patch block.

        Raises:
            NotEnoughDataError: If data is shorter than 35 bytes
            InvalidDataError: If the effect type byte is 16 or more
        """
        require_length(data, cls.DATA_SIZE)
        data = bytes(data[: cls.DATA_SIZE])

        submixes = []
        for i in range(SUBMIX_COUNT):
            start = SUBMIXES_OFFSET + i * SubmixSettings.DATA_SIZE
            with offset_context(start):
                submixes.append(
                    SubmixSettings.from_bytes(data[start : start + SubmixSettings.DATA_SIZE])
                )

        patch = cls(
            effect_type=EffectType.from_index(data[0] & 0x7F, offset=0),
            param1=data[1] & 0x7F,
            param2=data[2] & 0x7F,
            param3=data[3] & 0x7F,
            submixes=submixes,
        )
        logger.debug(f"Parsed effect patch {patch.effect_type.display_name}")
        return patch

    def data(self) -> bytes:
        """Encode the patch without its checksum (bytes 0-33)."""
        result = bytearray(
            [
                self.effect_type.to_index(),
                validate_wire_byte(self.param1, "effect parameter 1"),
                validate_wire_byte(self.param2, "effect parameter 2"),
                validate_wire_byte(self.param3, "effect parameter 3"),
            ]
        )
        result.extend(bytes(RESERVED_SIZE))
        for submix in self.submixes:
            result.extend(submix.to_bytes())
        return bytes(result)

    def to_bytes(self) -> bytes:
        """Encode the complete 35-byte block, checksum included."""
        return add_checksum(self.data())

    def submix(self, channel: Submix) -> SubmixSettings:
        """Get the settings of a submix channel by name."""
        return self.submixes[channel.to_index()]

    def validate(self) -> List[str]:
        checks = [
            ("effect parameter 1", self.param1, EFFECT_PARAM_SMALL.low, EFFECT_PARAM_SMALL.high),
            ("effect parameter 2", self.param2, EFFECT_PARAM_SMALL.low, EFFECT_PARAM_SMALL.high),
            ("effect parameter 3", self.param3, EFFECT_PARAM_LARGE.low, EFFECT_PARAM_LARGE.high),
        ]
        for channel, settings in zip(Submix, self.submixes):
            name = channel.display_name
            checks.append((f"submix {name} pan", settings.pan, PAN.low, PAN.high))
            checks.append((f"submix {name} send 1", settings.send1, SEND.low, SEND.high))
            checks.append((f"submix {name} send 2", settings.send2, SEND.low, SEND.high))

        errors = collect_errors(checks)
        if len(self.submixes) != SUBMIX_COUNT:
            errors.append(f"Expected {SUBMIX_COUNT} submixes, got {len(self.submixes)}")
        return errors
