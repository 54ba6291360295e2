"""
CLI display modules.
"""

from cli.display.tables import (
    display_dump_info,
    display_patch_names,
    display_single,
    display_multi,
    display_drum,
    display_effect,
    display_checksums,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_dump_info",
    "display_patch_names",
    "display_single",
    "display_multi",
    "display_drum",
    "display_effect",
    "display_checksums",
    "display_hex_dump",
]
