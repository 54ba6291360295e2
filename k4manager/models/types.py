"""
Closed enumerations used in K4 patch data.

Each enumeration is addressed on the wire by a contiguous 0-based index.
The wire table (index <-> member) is what the codecs use; display names
are a separate table and play no part in encoding.

Decoding an index with no table entry raises InvalidDataError carrying
the byte offset. It never falls back to a default member.
"""

from enum import Enum
from typing import Tuple

from k4manager.errors import InvalidDataError


class WireEnum(Enum):
    """Enumeration with an explicit wire index table."""

    @classmethod
    def wire_table(cls) -> Tuple["WireEnum", ...]:
        """Members in wire index order. Defaults to definition order."""
        return tuple(cls)

    @classmethod
    def from_index(cls, index: int, offset: int = 0) -> "WireEnum":
        """
        Get the member for a wire index.

        Args:
            index: Wire index (0-based)
            offset: Byte offset the index was read from, for error reports

        Returns:
            Corresponding member

        Raises:
            InvalidDataError: If the index has no mapping
        """
        table = cls.wire_table()
        if 0 <= index < len(table):
            return table[index]
        raise InvalidDataError(offset, f"no {cls.__name__} for index {index}")

    def to_index(self) -> int:
        """Get the wire index for this member."""
        return self.wire_table().index(self)


class Submix(WireEnum):
    """Output routing bus (submix channel) A-H."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"
    H = "h"

    @property
    def display_name(self) -> str:
        return self.value.upper()


class SourceMode(WireEnum):
    NORMAL = "normal"
    TWIN = "twin"
    DOUBLE = "double"

    @property
    def display_name(self) -> str:
        return self.value.upper()


class PolyphonyMode(WireEnum):
    POLY1 = "poly1"
    POLY2 = "poly2"
    SOLO1 = "solo1"
    SOLO2 = "solo2"

    @property
    def display_name(self) -> str:
        names = {
            PolyphonyMode.POLY1: "POLY 1",
            PolyphonyMode.POLY2: "POLY 2",
            PolyphonyMode.SOLO1: "SOLO 1",
            PolyphonyMode.SOLO2: "SOLO 2",
        }
        return names[self]


class WheelAssign(WireEnum):
    VIBRATO = "vibrato"
    LFO = "lfo"
    CUTOFF = "cutoff"

    @property
    def display_name(self) -> str:
        return self.value.upper() if self is WheelAssign.LFO else self.value.capitalize()


class LFOShape(WireEnum):
    """Waveform shared by the LFO and the vibrato."""

    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"
    SQUARE = "square"
    RANDOM = "random"

    @property
    def display_name(self) -> str:
        names = {
            LFOShape.TRIANGLE: "TRI",
            LFOShape.SAWTOOTH: "SAW",
            LFOShape.SQUARE: "SQR",
            LFOShape.RANDOM: "RND",
        }
        return names[self]


class VelocitySwitch(WireEnum):
    """
    Multi section velocity switch.

    The MIDI implementation document lists "0/all, 1/soft, 2/loud", but
    dumps from real instruments decode correctly only with the order the
    front panel uses: 0/soft, 1/loud, 2/all.
    """

    SOFT = "soft"
    LOUD = "loud"
    ALL = "all"

    @classmethod
    def wire_table(cls) -> Tuple["VelocitySwitch", ...]:
        return (cls.SOFT, cls.LOUD, cls.ALL)

    @property
    def display_name(self) -> str:
        return self.value.upper()


class PlayMode(WireEnum):
    """Multi section play mode."""

    KEYBOARD = "keyboard"
    MIDI = "midi"
    MIX = "mix"

    @property
    def display_name(self) -> str:
        names = {
            PlayMode.KEYBOARD: "KEYB",
            PlayMode.MIDI: "MIDI",
            PlayMode.MIX: "MIX",
        }
        return names[self]


class VelocityCurve(WireEnum):
    """Velocity curve 1-8 (wire 0-7)."""

    CURVE1 = 1
    CURVE2 = 2
    CURVE3 = 3
    CURVE4 = 4
    CURVE5 = 5
    CURVE6 = 6
    CURVE7 = 7
    CURVE8 = 8

    @property
    def display_name(self) -> str:
        return str(self.value)


class KeyScalingCurve(WireEnum):
    """Key scaling curve 1-8 (wire 0-7)."""

    CURVE1 = 1
    CURVE2 = 2
    CURVE3 = 3
    CURVE4 = 4
    CURVE5 = 5
    CURVE6 = 6
    CURVE7 = 7
    CURVE8 = 8

    @property
    def display_name(self) -> str:
        return str(self.value)


class EffectType(WireEnum):
    """Effect algorithm 1-16 (wire 0-15)."""

    REVERB_1 = 1
    REVERB_2 = 2
    REVERB_3 = 3
    REVERB_4 = 4
    GATE_REVERB = 5
    REVERSE_GATE = 6
    NORMAL_DELAY = 7
    STEREO_PANPOT_DELAY = 8
    CHORUS = 9
    OVERDRIVE_FLANGER = 10
    OVERDRIVE_NORMAL_DELAY = 11
    OVERDRIVE_REVERB = 12
    NORMAL_DELAY_NORMAL_DELAY = 13
    NORMAL_DELAY_STEREO_PANPOT_DELAY = 14
    CHORUS_NORMAL_DELAY = 15
    CHORUS_STEREO_PANPOT_DELAY = 16

    @property
    def display_name(self) -> str:
        names = {
            EffectType.REVERB_1: "Reverb 1",
            EffectType.REVERB_2: "Reverb 2",
            EffectType.REVERB_3: "Reverb 3",
            EffectType.REVERB_4: "Reverb 4",
            EffectType.GATE_REVERB: "Gate Reverb",
            EffectType.REVERSE_GATE: "Reverse Gate",
            EffectType.NORMAL_DELAY: "Normal Delay",
            EffectType.STEREO_PANPOT_DELAY: "Stereo Panpot Delay",
            EffectType.CHORUS: "Chorus",
            EffectType.OVERDRIVE_FLANGER: "Overdrive + Flanger",
            EffectType.OVERDRIVE_NORMAL_DELAY: "Overdrive + Normal Delay",
            EffectType.OVERDRIVE_REVERB: "Overdrive + Reverb",
            EffectType.NORMAL_DELAY_NORMAL_DELAY: "Normal Delay + Normal Delay",
            EffectType.NORMAL_DELAY_STEREO_PANPOT_DELAY: "Normal Delay + Stereo Pan.Delay",
            EffectType.CHORUS_NORMAL_DELAY: "Chorus + Normal Delay",
            EffectType.CHORUS_STEREO_PANPOT_DELAY: "Chorus + Stereo Pan.Delay",
        }
        return names[self]


class Locality(Enum):
    """Where a dump comes from: internal memory or a RAM card."""

    INTERNAL = "internal"
    EXTERNAL = "external"

    @property
    def display_name(self) -> str:
        return "INT" if self is Locality.INTERNAL else "EXT"


NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def note_name(key: int) -> str:
    """
    Get the note name for a MIDI key number.

    Example:
        >>> note_name(60)
        'C4'
        >>> note_name(0)
        'C-1'
    """
    octave = key // 12 - 1
    return f"{NOTE_NAMES[key % 12]}{octave}"


def key_number(name: str) -> int:
    """
    Get the MIDI key number for a note name like "C4" or "F#-1".

    Raises:
        ValueError: If the name is not a note name
    """
    note_part = name.rstrip("-0123456789")
    octave_part = name[len(note_part):]
    if note_part not in NOTE_NAMES or not octave_part:
        raise ValueError(f"Invalid note name: {name}")
    return (int(octave_part) + 1) * 12 + NOTE_NAMES.index(note_part)
