"""
K4 SysEx message framing and dump identification.

K4 message format:

    F0 40 0n FF 00 04 S1 S2 [data...] F7

Where:
    - 40: Kawai manufacturer ID
    - 0n: MIDI channel (0 = channel 1)
    - FF: Function (0x20 one patch dump, 0x22 all patch dump, ...)
    - 00 04: Synthesizer group, K4/K4r machine ID
    - S1: Substatus 1, memory area
        0x00 = INT singles/multis, 0x02 = EXT singles/multis
        0x01 = INT drum/effects,   0x03 = EXT drum/effects
    - S2: Substatus 2, patch number or block selector
        singles 0-63, multis 64-127, effects 0-31, drum 32,
        block dumps 0x00 (singles/effects) or 0x40 (multis)
    - data: Patch data, checksums included
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from k4manager.constants import (
    BANK_SIZE,
    DRUM_SIZE,
    EFFECT_PATCH_COUNT,
    EFFECT_PATCH_SIZE,
    FRAMED_HEADER_SIZE,
    HEADER_SIZE,
    KAWAI_ID,
    MULTI_PATCH_COUNT,
    MULTI_PATCH_SIZE,
    SINGLE_PATCH_COUNT,
    SINGLE_PATCH_SIZE,
    SYSEX_END,
    SYSEX_START,
)
from k4manager.errors import (
    InvalidDataError,
    NotEnoughDataError,
    ParseError,
    UnidentifiedError,
    offset_context,
)
from k4manager.formats.k4.header import Function, Header
from k4manager.models.types import Locality

logger = logging.getLogger(__name__)

MULTI_NUMBER_BASE = 64
DRUM_NUMBER = 32
BLOCK_MULTI_SELECTOR = 0x40


class DumpKind(Enum):
    """Kinds of K4 patch data dumps."""

    ALL = "all"
    ONE_SINGLE = "one_single"
    ONE_MULTI = "one_multi"
    DRUM = "drum"
    ONE_EFFECT = "one_effect"
    BLOCK_SINGLE = "block_single"
    BLOCK_MULTI = "block_multi"
    BLOCK_EFFECT = "block_effect"

    @property
    def payload_size(self) -> int:
        """Size of the data between the header and F7."""
        sizes = {
            DumpKind.ALL: BANK_SIZE,
            DumpKind.ONE_SINGLE: SINGLE_PATCH_SIZE,
            DumpKind.ONE_MULTI: MULTI_PATCH_SIZE,
            DumpKind.DRUM: DRUM_SIZE,
            DumpKind.ONE_EFFECT: EFFECT_PATCH_SIZE,
            DumpKind.BLOCK_SINGLE: SINGLE_PATCH_COUNT * SINGLE_PATCH_SIZE,
            DumpKind.BLOCK_MULTI: MULTI_PATCH_COUNT * MULTI_PATCH_SIZE,
            DumpKind.BLOCK_EFFECT: EFFECT_PATCH_COUNT * EFFECT_PATCH_SIZE,
        }
        return sizes[self]

    @property
    def is_drum_or_effect(self) -> bool:
        return self in (DumpKind.DRUM, DumpKind.ONE_EFFECT, DumpKind.BLOCK_EFFECT)

    @property
    def is_block(self) -> bool:
        return self in (DumpKind.BLOCK_SINGLE, DumpKind.BLOCK_MULTI, DumpKind.BLOCK_EFFECT)

    @property
    def display_name(self) -> str:
        names = {
            DumpKind.ALL: "Bank",
            DumpKind.ONE_SINGLE: "Single",
            DumpKind.ONE_MULTI: "Multi",
            DumpKind.DRUM: "Drum",
            DumpKind.ONE_EFFECT: "Effect",
            DumpKind.BLOCK_SINGLE: "Block Single",
            DumpKind.BLOCK_MULTI: "Block Multi",
            DumpKind.BLOCK_EFFECT: "Block Effect",
        }
        return names[self]


@dataclass
class DumpIdentity:
    """
    What a dump contains and where it comes from.

    Attributes:
        kind: Dump kind
        locality: Internal memory or RAM card
        number: Patch number for one-patch dumps (singles and multis
            0-63, effects 0-31), None otherwise
    """

    kind: DumpKind
    locality: Locality
    number: Optional[int] = None


@dataclass
class SysExMessage:
    """
    A framed K4 message split into header and payload.

    Attributes:
        header: Parsed header
        payload: Bytes between the header and F7
        raw: Original message bytes, F0 and F7 included
    """

    header: Header
    payload: bytes
    raw: bytes = b""

    @property
    def is_dump(self) -> bool:
        return self.header.function in (
            Function.ONE_PATCH_DATA_DUMP,
            Function.BLOCK_PATCH_DATA_DUMP,
            Function.ALL_PATCH_DATA_DUMP,
        )


def _locality(substatus1: int) -> Locality:
    return Locality.EXTERNAL if substatus1 & 0x02 else Locality.INTERNAL


def identify(header: Header) -> DumpIdentity:
    """
    Identify a dump from its header.

    Args:
        header: Parsed message header

    Returns:
        Dump kind, locality and patch number

    Raises:
        UnidentifiedError: If the function/substatus combination is not
            a K4 patch data dump
    """
    function = header.function
    sub1 = header.substatus1
    sub2 = header.substatus2

    if sub1 in (0x00, 0x02):
        locality = _locality(sub1)
        if function == Function.ONE_PATCH_DATA_DUMP:
            if 0 <= sub2 < MULTI_NUMBER_BASE:
                return DumpIdentity(DumpKind.ONE_SINGLE, locality, sub2)
            if MULTI_NUMBER_BASE <= sub2 <= 127:
                return DumpIdentity(DumpKind.ONE_MULTI, locality, sub2 - MULTI_NUMBER_BASE)
        elif function == Function.BLOCK_PATCH_DATA_DUMP:
            if sub2 == 0x00:
                return DumpIdentity(DumpKind.BLOCK_SINGLE, locality)
            if sub2 == BLOCK_MULTI_SELECTOR:
                return DumpIdentity(DumpKind.BLOCK_MULTI, locality)
        elif function == Function.ALL_PATCH_DATA_DUMP and sub2 == 0x00:
            return DumpIdentity(DumpKind.ALL, locality)

    elif sub1 in (0x01, 0x03):
        locality = _locality(sub1)
        if function == Function.ONE_PATCH_DATA_DUMP:
            if 0 <= sub2 < EFFECT_PATCH_COUNT:
                return DumpIdentity(DumpKind.ONE_EFFECT, locality, sub2)
            if sub2 == DRUM_NUMBER:
                return DumpIdentity(DumpKind.DRUM, locality)
        elif function == Function.BLOCK_PATCH_DATA_DUMP and sub2 == 0x00:
            return DumpIdentity(DumpKind.BLOCK_EFFECT, locality)

    raise UnidentifiedError(
        f"Unrecognised K4 dump: function 0x{int(function):02X}, "
        f"substatus 0x{sub1:02X} 0x{sub2:02X}"
    )


def substatus_for(kind: DumpKind, locality: Locality, number: int = 0) -> Tuple[int, int]:
    """
    Get the substatus bytes that address a dump.

    This is the inverse of :func:`identify`.

    Args:
        kind: Dump kind
        locality: Internal memory or RAM card
        number: Patch number for one-patch kinds

    Returns:
        (substatus1, substatus2)
    """
    sub1 = 0x01 if kind.is_drum_or_effect else 0x00
    if locality == Locality.EXTERNAL:
        sub1 |= 0x02

    if kind == DumpKind.ONE_SINGLE:
        if not 0 <= number < SINGLE_PATCH_COUNT:
            raise ValueError(f"Single patch number must be 0-63, got {number}")
        sub2 = number
    elif kind == DumpKind.ONE_MULTI:
        if not 0 <= number < MULTI_PATCH_COUNT:
            raise ValueError(f"Multi patch number must be 0-63, got {number}")
        sub2 = MULTI_NUMBER_BASE + number
    elif kind == DumpKind.ONE_EFFECT:
        if not 0 <= number < EFFECT_PATCH_COUNT:
            raise ValueError(f"Effect patch number must be 0-31, got {number}")
        sub2 = number
    elif kind == DumpKind.DRUM:
        sub2 = DRUM_NUMBER
    elif kind == DumpKind.BLOCK_MULTI:
        sub2 = BLOCK_MULTI_SELECTOR
    else:
        sub2 = 0x00

    return sub1, sub2


def dump_function(kind: DumpKind) -> Function:
    """Function code used to send a dump of this kind."""
    if kind == DumpKind.ALL:
        return Function.ALL_PATCH_DATA_DUMP
    if kind.is_block:
        return Function.BLOCK_PATCH_DATA_DUMP
    return Function.ONE_PATCH_DATA_DUMP


def frame(header: Header, payload: bytes) -> bytes:
    """
    Wrap a payload into a complete K4 message.

    Returns:
        F0 40 <header> <payload> F7
    """
    return bytes([SYSEX_START, KAWAI_ID]) + header.to_bytes() + bytes(payload) + bytes([SYSEX_END])


def unframe(message: bytes) -> Tuple[Header, bytes]:
    """
    Split a complete K4 message into header and payload.

    Offsets in raised errors are relative to the start of the message.

    Raises:
        NotEnoughDataError: If the message cannot hold F0, manufacturer,
            header and F7
        InvalidDataError: If the framing bytes or the header are wrong
    """
    message = bytes(message)
    required = FRAMED_HEADER_SIZE + 1
    if len(message) < required:
        raise NotEnoughDataError(len(message), required)

    if message[0] != SYSEX_START:
        raise InvalidDataError(0, "message does not start with F0")
    if message[1] != KAWAI_ID:
        raise InvalidDataError(1, f"manufacturer 0x{message[1]:02X} is not Kawai")
    if message[-1] != SYSEX_END:
        raise InvalidDataError(len(message) - 1, "message does not end with F7")

    with offset_context(2):
        header = Header.from_bytes(message[2 : 2 + HEADER_SIZE])

    return header, message[FRAMED_HEADER_SIZE:-1]


def dump_request(
    channel: int,
    kind: DumpKind,
    locality: Locality = Locality.INTERNAL,
    number: int = 0,
) -> bytes:
    """
    Build a dump request message.

    Args:
        channel: MIDI channel (1-16)
        kind: What to request
        locality: Internal memory or RAM card
        number: Patch number for one-patch requests

    Returns:
        Complete request message, e.g. F0 40 00 00 00 04 00 05 F7 for
        single A-6 on channel 1

    Example:
        >>> dump_request(1, DumpKind.ALL).hex(" ")
        'f0 40 00 02 00 04 00 00 f7'
    """
    if kind == DumpKind.ALL:
        function = Function.ALL_PATCH_DUMP_REQUEST
    elif kind.is_block:
        function = Function.BLOCK_PATCH_DUMP_REQUEST
    else:
        function = Function.ONE_PATCH_DUMP_REQUEST

    sub1, sub2 = substatus_for(kind, locality, number)
    header = Header(channel=channel, function=function, substatus1=sub1, substatus2=sub2)
    return frame(header, b"")


class SysExParser:
    """
    Parser for K4 SysEx streams.

    A .syx file may hold several messages, possibly from other
    instruments. Messages that are not Kawai K4 messages are skipped.

    Example:
        parser = SysExParser()
        messages = parser.parse_file("A401.SYX")

        for msg in messages:
            if msg.is_dump:
                print(identify(msg.header).kind.display_name)
    """

    def __init__(self):
        self.messages: List[SysExMessage] = []
        self.skipped = 0

    def parse_file(self, filepath: Union[str, Path]) -> List[SysExMessage]:
        """
        Parse a SysEx file.

        Args:
            filepath: Path to .syx file

        Returns:
            List of parsed K4 messages
        """
        with open(filepath, "rb") as f:
            data = f.read()
        return self.parse_bytes(data)

    def parse_bytes(self, data: Union[bytes, bytearray]) -> List[SysExMessage]:
        """
        Parse SysEx data from bytes.

        Args:
            data: Raw SysEx data, one or more messages

        Returns:
            List of parsed K4 messages
        """
        self.messages = []
        self.skipped = 0

        if isinstance(data, bytearray):
            data = bytes(data)

        for raw in self._split_messages(data):
            try:
                header, payload = unframe(raw)
            except ParseError as e:
                logger.debug(f"Skipping {len(raw)}-byte message: {e}")
                self.skipped += 1
                continue
            self.messages.append(SysExMessage(header=header, payload=payload, raw=raw))

        logger.debug(f"Found {len(self.messages)} K4 messages, skipped {self.skipped}")
        return self.messages

    def _split_messages(self, data: bytes) -> List[bytes]:
        """Split data into individual SysEx messages."""
        messages = []
        start = None

        for i, byte in enumerate(data):
            if byte == SYSEX_START:
                start = i
            elif byte == SYSEX_END and start is not None:
                messages.append(data[start : i + 1])
                start = None

        return messages
