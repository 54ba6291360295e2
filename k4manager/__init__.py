"""
K4Manager - Codec for Kawai K4/K4r System Exclusive patch data.

This library provides tools to:
- Decode and encode single, multi, drum and effect patches
- Read and write full-bank and single-patch .syx dumps
- Identify dumps and build dump request messages

Example usage:
    from k4manager import K4Reader, K4Writer

    # Read a bank dump
    dump = K4Reader.read("A401.SYX")
    bank = dump.model
    print(bank.singles[0].name)

    # Change a patch and write it back as a one-patch dump
    bank.singles[0].volume = 80
    K4Writer.write(bank.singles[0], "single.syx", number=0)
"""

__version__ = "0.1.0"
__author__ = "K4Manager Contributors"

from k4manager.errors import (
    ParseError,
    NotEnoughDataError,
    InvalidDataError,
    UnidentifiedError,
)
from k4manager.formats.k4.reader import K4Reader, Dump
from k4manager.formats.k4.writer import K4Writer
from k4manager.models.bank import Bank
from k4manager.models.single import SinglePatch
from k4manager.models.multi import MultiPatch, Section
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch

__all__ = [
    "ParseError",
    "NotEnoughDataError",
    "InvalidDataError",
    "UnidentifiedError",
    "K4Reader",
    "K4Writer",
    "Dump",
    "Bank",
    "SinglePatch",
    "MultiPatch",
    "Section",
    "Drum",
    "EffectPatch",
]
