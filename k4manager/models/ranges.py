"""
Bounded integer value ranges with wire offsets.

Many K4 parameters are signed on the panel but stored unsigned on the
wire, shifted by a fixed center offset:

    depth -50..+50  <->  wire 0..100   (offset 50)
    coarse -24..+24 <->  wire 0..48    (offset 24)
    pan -7..+7      <->  wire 0..14    (offset 7)

Channels and effect numbers go the other way: 1-based in the model,
0-based on the wire (offset -1).

Decoding never clamps; it trusts the wire. Clamping is something a caller
asks for explicitly when building values by hand.
"""

from dataclasses import dataclass

from k4manager.utils.validation import validate_range, validate_wire_byte


@dataclass(frozen=True)
class ValueRange:
    """
    A closed integer range and its wire offset.

    Attributes:
        low: Lowest legal model value
        high: Highest legal model value
        offset: Added to a model value to get the wire value
        name: Parameter name used in error messages
    """

    low: int
    high: int
    offset: int = 0
    name: str = "value"

    def decode(self, wire: int) -> int:
        """Convert a wire value to a model value."""
        return wire - self.offset

    def encode(self, value: int) -> int:
        """
        Convert a model value to a wire value.

        Raises:
            ValidationError: If the result does not fit a 7-bit data byte
        """
        return validate_wire_byte(value + self.offset, self.name)

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def clamp(self, value: int) -> int:
        """Clamp a model value into the range."""
        return max(self.low, min(value, self.high))

    def validate(self, value: int) -> None:
        """
        Raises:
            ValidationError: If value is outside the range
        """
        validate_range(value, self.low, self.high, self.name)

    def values(self) -> range:
        """All legal model values, low to high."""
        return range(self.low, self.high + 1)


LEVEL = ValueRange(0, 100, name="level")
DEPTH = ValueRange(-50, 50, offset=50, name="depth")
COARSE = ValueRange(-24, 24, offset=24, name="coarse")
FINE = ValueRange(-50, 50, offset=50, name="fine")
TRANSPOSE = ValueRange(-24, 24, offset=24, name="transpose")
TUNE = ValueRange(-50, 50, offset=50, name="tune")
PAN = ValueRange(-7, 7, offset=7, name="pan")
SEND = ValueRange(0, 100, name="send")
BENDER_RANGE = ValueRange(0, 12, name="bender range")
RESONANCE = ValueRange(0, 7, name="resonance")
CHANNEL = ValueRange(1, 16, offset=-1, name="channel")
EFFECT_NUMBER = ValueRange(1, 32, offset=-1, name="effect number")
PATCH_NUMBER = ValueRange(0, 63, name="single patch number")
KEY = ValueRange(0, 127, name="key")
WAVE_NUMBER = ValueRange(1, 256, name="wave number")
EFFECT_PARAM_SMALL = ValueRange(0, 7, name="effect parameter")
EFFECT_PARAM_LARGE = ValueRange(0, 31, name="effect parameter")
