"""
K4 System Exclusive header.

Every K4 message starts with F0 40 followed by this 6-byte header:

    0: channel (0-15 on the wire, 1-16 in the model)
    1: function
    2: group (0x00, synthesizer)
    3: machine ID (0x04, K4/K4r)
    4: substatus 1
    5: substatus 2
"""

from dataclasses import dataclass
from enum import IntEnum

from k4manager.constants import HEADER_SIZE
from k4manager.errors import InvalidDataError, require_length
from k4manager.models.ranges import CHANNEL
from k4manager.utils.validation import validate_wire_byte


class Function(IntEnum):
    """K4 System Exclusive function codes."""

    ONE_PATCH_DUMP_REQUEST = 0x00
    BLOCK_PATCH_DUMP_REQUEST = 0x01
    ALL_PATCH_DUMP_REQUEST = 0x02
    PARAMETER_SEND = 0x10
    ONE_PATCH_DATA_DUMP = 0x20
    BLOCK_PATCH_DATA_DUMP = 0x21
    ALL_PATCH_DATA_DUMP = 0x22
    EDIT_BUFFER_DUMP = 0x23
    PROGRAM_CHANGE = 0x30
    WRITE_COMPLETE = 0x40
    WRITE_ERROR = 0x41
    WRITE_ERROR_PROTECT = 0x42
    WRITE_ERROR_NO_CARD = 0x43

    @property
    def display_name(self) -> str:
        names = {
            Function.ONE_PATCH_DUMP_REQUEST: "One Patch Dump Request",
            Function.BLOCK_PATCH_DUMP_REQUEST: "Block Patch Dump Request",
            Function.ALL_PATCH_DUMP_REQUEST: "All Patch Dump Request",
            Function.PARAMETER_SEND: "Parameter Send",
            Function.ONE_PATCH_DATA_DUMP: "One Patch Data Dump",
            Function.BLOCK_PATCH_DATA_DUMP: "Block Patch Data Dump",
            Function.ALL_PATCH_DATA_DUMP: "All Patch Data Dump",
            Function.EDIT_BUFFER_DUMP: "Edit Buffer Dump",
            Function.PROGRAM_CHANGE: "Program Change",
            Function.WRITE_COMPLETE: "Write Complete",
            Function.WRITE_ERROR: "Write Error",
            Function.WRITE_ERROR_PROTECT: "Write Error (Protect)",
            Function.WRITE_ERROR_NO_CARD: "Write Error (No Card)",
        }
        return names[self]


@dataclass
class Header:
    """
    Parsed K4 message header.

    Attributes:
        channel: MIDI channel (1-16)
        function: Function code
        substatus1: Substatus 1 (memory area selector)
        substatus2: Substatus 2 (patch number or block selector)
    """

    channel: int = 1
    function: Function = Function.ONE_PATCH_DATA_DUMP
    substatus1: int = 0x00
    substatus2: int = 0x00

    GROUP = 0x00
    MACHINE_ID = 0x04
    DATA_SIZE = HEADER_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        """
        Parse a header.

        Args:
            data: Header bytes, starting after F0 40

        Raises:
            NotEnoughDataError: If fewer than 6 bytes are given
            InvalidDataError: At offset 1 for an unknown function, at
                offset 2 if the group and machine ID are not a K4's
        """
        require_length(data, cls.DATA_SIZE)

        try:
            function = Function(data[1])
        except ValueError:
            raise InvalidDataError(1, f"unknown function 0x{data[1]:02X}") from None

        if data[2] != cls.GROUP or data[3] != cls.MACHINE_ID:
            raise InvalidDataError(2, f"not a K4 header: group 0x{data[2]:02X}, machine 0x{data[3]:02X}")

        return cls(
            channel=CHANNEL.decode(data[0] & 0x0F),
            function=function,
            substatus1=data[4],
            substatus2=data[5],
        )

    def to_bytes(self) -> bytes:
        return bytes(
            [
                CHANNEL.encode(self.channel),
                int(self.function),
                self.GROUP,
                self.MACHINE_ID,
                validate_wire_byte(self.substatus1, "substatus 1"),
                validate_wire_byte(self.substatus2, "substatus 2"),
            ]
        )

    def __str__(self) -> str:
        return (
            f"Ch: {self.channel}  Fn: {self.function.display_name}  "
            f"Sub1: 0x{self.substatus1:02X}  Sub2: 0x{self.substatus2:02X}"
        )
