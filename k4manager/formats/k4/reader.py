"""
K4 SysEx file reader.

Reads .syx files holding K4 patch data dumps and converts them to the
patch models. Checksums are checked and reported, but a wrong checksum
never stops a dump from being parsed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from k4manager.constants import (
    DRUM_COMMON_SIZE,
    DRUM_NOTE_COUNT,
    DRUM_NOTE_SIZE,
    EFFECT_PATCH_COUNT,
    EFFECT_PATCH_SIZE,
    MULTI_PATCH_COUNT,
    MULTI_PATCH_SIZE,
    SINGLE_PATCH_COUNT,
    SINGLE_PATCH_SIZE,
)
from k4manager.errors import UnidentifiedError, offset_context, require_length
from k4manager.formats.k4.header import Header
from k4manager.formats.k4.sysex_parser import (
    DumpIdentity,
    DumpKind,
    SysExMessage,
    SysExParser,
    identify,
)
from k4manager.models.bank import Bank, iter_blocks
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch
from k4manager.models.multi import MultiPatch
from k4manager.models.single import SinglePatch
from k4manager.models.types import Locality
from k4manager.utils.checksum import verify_block

logger = logging.getLogger(__name__)

PatchModel = Union[Bank, SinglePatch, MultiPatch, Drum, EffectPatch, List]


@dataclass
class Dump:
    """
    A parsed K4 dump.

    Attributes:
        header: Message header
        identity: Dump kind, locality and patch number
        model: Parsed data; a list of patches for block dumps
        payload: Raw payload bytes
        bad_checksums: Labels of blocks whose checksum did not match
    """

    header: Header
    identity: DumpIdentity
    model: PatchModel
    payload: bytes = b""
    bad_checksums: List[str] = field(default_factory=list)

    @property
    def kind(self) -> DumpKind:
        return self.identity.kind

    @property
    def locality(self) -> Locality:
        return self.identity.locality

    @property
    def number(self) -> Optional[int]:
        return self.identity.number

    @property
    def checksums_valid(self) -> bool:
        return not self.bad_checksums


def block_layout(kind: DumpKind) -> Iterator[Tuple[str, int, int]]:
    """
    Enumerate the checksummed blocks in the payload of a dump kind.

    Yields:
        (label, start, length) for every block
    """
    if kind == DumpKind.ALL:
        yield from iter_blocks()
    elif kind in (DumpKind.ONE_SINGLE, DumpKind.ONE_MULTI, DumpKind.ONE_EFFECT):
        yield kind.display_name.lower(), 0, kind.payload_size
    elif kind == DumpKind.DRUM:
        yield "drum common", 0, DRUM_COMMON_SIZE
        for i in range(DRUM_NOTE_COUNT):
            start = DRUM_COMMON_SIZE + i * DRUM_NOTE_SIZE
            yield f"drum note {Drum.note_name_for(i)}", start, DRUM_NOTE_SIZE
    elif kind == DumpKind.BLOCK_SINGLE:
        for i in range(SINGLE_PATCH_COUNT):
            yield f"single {Bank.patch_name_for(i)}", i * SINGLE_PATCH_SIZE, SINGLE_PATCH_SIZE
    elif kind == DumpKind.BLOCK_MULTI:
        for i in range(MULTI_PATCH_COUNT):
            yield f"multi {Bank.patch_name_for(i)}", i * MULTI_PATCH_SIZE, MULTI_PATCH_SIZE
    elif kind == DumpKind.BLOCK_EFFECT:
        for i in range(EFFECT_PATCH_COUNT):
            yield f"effect {i + 1}", i * EFFECT_PATCH_SIZE, EFFECT_PATCH_SIZE


def verify_checksums(kind: DumpKind, payload: bytes) -> List[Tuple[str, bool]]:
    """
    Check the checksum of every block in a payload.

    Blocks that extend past the end of the payload are skipped.

    Returns:
        (label, valid) for every block present
    """
    results = []
    for label, start, length in block_layout(kind):
        block = payload[start : start + length]
        if len(block) < length:
            break
        results.append((label, verify_block(block)))
    return results


class K4Reader:
    """
    Reader for K4 SysEx files.

    Example:
        dump = K4Reader.read("A401.SYX")
        if dump.kind == DumpKind.ALL:
            print(dump.model.singles[0].name)
    """

    def __init__(self):
        self.parser = SysExParser()

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Dump:
        """
        Read a K4 SysEx file and return its first dump.

        Args:
            filepath: Path to .syx file

        Returns:
            Parsed Dump
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Dump:
        """
        Parse a SysEx file.

        Raises:
            FileNotFoundError: If the file does not exist
            UnidentifiedError: If the file holds no K4 patch dump
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        logger.debug(f"Read {len(data)} bytes from {filepath}")
        return self.parse_bytes(data)

    def parse_bytes(self, data: bytes) -> Dump:
        """
        Parse the first K4 patch dump found in SysEx data.

        Raises:
            UnidentifiedError: If the data holds no K4 patch dump
            ParseError: If the dump itself cannot be decoded
        """
        dumps = self.parse_all(data)
        if not dumps:
            raise UnidentifiedError("No K4 patch data dump found")
        return dumps[0]

    def parse_all(self, data: bytes) -> List[Dump]:
        """
        Parse every K4 patch dump found in SysEx data.

        Messages that are not patch dumps (requests, write results,
        parameter changes) are skipped.
        """
        dumps = []
        for message in self.parser.parse_bytes(data):
            if not message.is_dump:
                logger.debug(f"Skipping non-dump message: {message.header}")
                continue
            dumps.append(self.parse_message(message))
        return dumps

    def parse_message(self, message: SysExMessage) -> Dump:
        """
        Decode one framed dump message.

        Raises:
            UnidentifiedError: If the header does not identify a dump
            NotEnoughDataError: If the payload is too short for its kind
            InvalidDataError: If the payload holds an unmapped value
        """
        identity = identify(message.header)
        payload = message.payload
        kind = identity.kind

        require_length(payload, kind.payload_size)
        if len(payload) > kind.payload_size:
            logger.warning(
                f"{kind.display_name} dump has {len(payload) - kind.payload_size} "
                f"trailing bytes, ignoring them"
            )
            payload = payload[: kind.payload_size]

        bad_checksums = [label for label, valid in verify_checksums(kind, payload) if not valid]
        for label in bad_checksums:
            logger.warning(f"Checksum mismatch in {label}")

        model = self._build_model(kind, payload)
        logger.debug(
            f"Parsed {kind.display_name} dump ({identity.locality.display_name}), "
            f"{len(bad_checksums)} bad checksums"
        )
        return Dump(
            header=message.header,
            identity=identity,
            model=model,
            payload=payload,
            bad_checksums=bad_checksums,
        )

    def _build_model(self, kind: DumpKind, payload: bytes) -> PatchModel:
        if kind == DumpKind.ALL:
            return Bank.from_bytes(payload)
        if kind == DumpKind.ONE_SINGLE:
            return SinglePatch.from_bytes(payload)
        if kind == DumpKind.ONE_MULTI:
            return MultiPatch.from_bytes(payload)
        if kind == DumpKind.DRUM:
            return Drum.from_bytes(payload)
        if kind == DumpKind.ONE_EFFECT:
            return EffectPatch.from_bytes(payload)
        if kind == DumpKind.BLOCK_SINGLE:
            return self._split(payload, SinglePatch, SINGLE_PATCH_COUNT)
        if kind == DumpKind.BLOCK_MULTI:
            return self._split(payload, MultiPatch, MULTI_PATCH_COUNT)
        return self._split(payload, EffectPatch, EFFECT_PATCH_COUNT)

    @staticmethod
    def _split(payload: bytes, patch_class, count: int) -> List:
        size = patch_class.DATA_SIZE
        patches = []
        for i in range(count):
            start = i * size
            with offset_context(start):
                patches.append(patch_class.from_bytes(payload[start : start + size]))
        return patches
