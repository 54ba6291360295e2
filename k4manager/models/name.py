"""
Fixed-width patch names.
"""

from k4manager.constants import NAME_LENGTH


class PatchName(str):
    """
    A patch name, always exactly 10 characters.

    Construction pads with spaces or truncates; there is no other way to
    get a PatchName, so every instance is already wire-ready.

    Example:
        >>> PatchName("Lead")
        'Lead      '
        >>> PatchName("A very long name")
        'A very lon'
    """

    def __new__(cls, text: str = "") -> "PatchName":
        return super().__new__(cls, text[:NAME_LENGTH].ljust(NAME_LENGTH))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PatchName":
        """
        Decode a name field.

        Decoding is best-effort: bytes outside ASCII become U+FFFD and NUL
        bytes become spaces, so a sloppy dump never fails on its name.
        """
        text = bytes(data[:NAME_LENGTH]).decode("ascii", errors="replace")
        return cls(text.replace("\x00", " "))

    def to_bytes(self) -> bytes:
        """Encode as exactly 10 ASCII bytes; unencodable characters become '?'."""
        return str(self).encode("ascii", errors="replace")[:NAME_LENGTH].ljust(NAME_LENGTH, b" ")
