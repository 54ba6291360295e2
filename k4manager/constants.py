"""
Fixed block sizes and counts for Kawai K4 System Exclusive data.

Every K4 layout is a fixed-size block; these values are never computed
from buffer contents.
"""

# SysEx framing
SYSEX_START = 0xF0
SYSEX_END = 0xF7
KAWAI_ID = 0x40

HEADER_SIZE = 6  # channel, function, group, machine, substatus 1/2
FRAMED_HEADER_SIZE = 8  # F0 + manufacturer + header

NAME_LENGTH = 10

SINGLE_PATCH_COUNT = 64
SINGLE_PATCH_SIZE = 131

MULTI_PATCH_COUNT = 64
MULTI_PATCH_SIZE = 77
SECTION_COUNT = 8
SECTION_SIZE = 8

DRUM_COMMON_SIZE = 11
DRUM_NOTE_COUNT = 61
DRUM_NOTE_SIZE = 11
DRUM_SIZE = DRUM_COMMON_SIZE + DRUM_NOTE_COUNT * DRUM_NOTE_SIZE  # 682

EFFECT_PATCH_COUNT = 32
EFFECT_PATCH_SIZE = 35
SUBMIX_COUNT = 8

BANK_SIZE = (
    SINGLE_PATCH_COUNT * SINGLE_PATCH_SIZE
    + MULTI_PATCH_COUNT * MULTI_PATCH_SIZE
    + DRUM_SIZE
    + EFFECT_PATCH_COUNT * EFFECT_PATCH_SIZE
)  # 15114

# Full bank message: header + payload + terminator
FRAMED_BANK_SIZE = FRAMED_HEADER_SIZE + BANK_SIZE + 1  # 15123
