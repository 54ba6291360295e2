"""K4 SysEx format handlers."""

from k4manager.formats.k4.header import Header, Function
from k4manager.formats.k4.reader import K4Reader, Dump
from k4manager.formats.k4.writer import K4Writer
from k4manager.formats.k4.sysex_parser import (
    SysExParser,
    SysExMessage,
    DumpKind,
    DumpIdentity,
    identify,
    frame,
    unframe,
    dump_request,
)

__all__ = [
    "Header",
    "Function",
    "K4Reader",
    "K4Writer",
    "Dump",
    "SysExParser",
    "SysExMessage",
    "DumpKind",
    "DumpIdentity",
    "identify",
    "frame",
    "unframe",
    "dump_request",
]
