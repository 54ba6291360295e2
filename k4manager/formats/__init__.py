"""Format handlers for K4 SysEx data."""

from k4manager.formats.k4 import K4Reader, K4Writer

__all__ = ["K4Reader", "K4Writer"]
