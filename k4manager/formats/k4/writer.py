"""
K4 SysEx file writer.

Writes patch models to .syx files as K4 patch data dumps. Every block is
written with a freshly computed checksum.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

from k4manager.constants import EFFECT_PATCH_COUNT, MULTI_PATCH_COUNT, SINGLE_PATCH_COUNT
from k4manager.formats.k4.header import Header
from k4manager.formats.k4.sysex_parser import DumpKind, dump_function, frame, substatus_for
from k4manager.models.bank import Bank
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch
from k4manager.models.multi import MultiPatch
from k4manager.models.single import SinglePatch
from k4manager.models.types import Locality
from k4manager.utils.validation import ValidationError, validate_channel

logger = logging.getLogger(__name__)

Writable = Union[Bank, SinglePatch, MultiPatch, Drum, EffectPatch, Sequence]


class K4Writer:
    """
    Writer for K4 SysEx files.

    Example:
        patch = SinglePatch(name="My Lead")
        K4Writer.write(patch, "mylead.syx", number=5)  # single A-6
    """

    # Block dumps must hold a complete memory area
    BLOCK_KINDS = {
        SinglePatch: (DumpKind.BLOCK_SINGLE, SINGLE_PATCH_COUNT),
        MultiPatch: (DumpKind.BLOCK_MULTI, MULTI_PATCH_COUNT),
        EffectPatch: (DumpKind.BLOCK_EFFECT, EFFECT_PATCH_COUNT),
    }

    ONE_KINDS = {
        Bank: DumpKind.ALL,
        SinglePatch: DumpKind.ONE_SINGLE,
        MultiPatch: DumpKind.ONE_MULTI,
        Drum: DumpKind.DRUM,
        EffectPatch: DumpKind.ONE_EFFECT,
    }

    def __init__(self, channel: int = 1, locality: Locality = Locality.INTERNAL):
        """
        Initialize writer.

        Args:
            channel: MIDI channel (1-16)
            locality: Internal memory or RAM card
        """
        validate_channel(channel)
        self.channel = channel
        self.locality = locality

    @classmethod
    def write(
        cls,
        model: Writable,
        filepath: Union[str, Path],
        channel: int = 1,
        locality: Locality = Locality.INTERNAL,
        number: int = 0,
    ) -> None:
        """
        Write a model to a SysEx file.

        Args:
            model: Bank, patch, drum, or a complete list of patches
            filepath: Output file path
            channel: MIDI channel (1-16)
            locality: Internal memory or RAM card
            number: Patch number for single, multi and effect patches
        """
        writer = cls(channel, locality)
        data = writer.to_bytes(model, number)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

        logger.debug(f"Wrote {len(data)} bytes to {filepath}")

    def to_bytes(self, model: Writable, number: int = 0) -> bytes:
        """
        Convert a model to a complete K4 message.

        Raises:
            ValidationError: If a value does not fit its wire field, or a
                block list is not a complete memory area
            TypeError: If the model is not a K4 patch type
        """
        kind = self.kind_for(model)
        if kind.is_block:
            payload = b"".join(patch.to_bytes() for patch in model)
        else:
            payload = model.to_bytes()

        sub1, sub2 = substatus_for(kind, self.locality, number)
        header = Header(
            channel=self.channel,
            function=dump_function(kind),
            substatus1=sub1,
            substatus2=sub2,
        )
        return frame(header, payload)

    def kind_for(self, model: Writable) -> DumpKind:
        """Get the dump kind used to send a model."""
        for model_class, kind in self.ONE_KINDS.items():
            if isinstance(model, model_class):
                return kind

        if isinstance(model, (list, tuple)) and model:
            patches: List = list(model)
            for model_class, (kind, count) in self.BLOCK_KINDS.items():
                if all(isinstance(p, model_class) for p in patches):
                    if len(patches) != count:
                        raise ValidationError(
                            f"{kind.display_name} dump needs {count} patches, got {len(patches)}"
                        )
                    return kind

        raise TypeError(f"Cannot write {type(model).__name__} as a K4 dump")
