"""
Single patch data model.

A single patch is a 131-byte block:

    s0-s9      name
    s10        volume
    s11        effect patch number (bits 0-4, 0-based on the wire)
    s12        submix (bits 0-2)
    s13        source mode (bits 0-1), polyphony (bits 2-3),
               AM 1>2 (bit 4), AM 3>4 (bit 5)
    s14        source mute mask (bits 0-3, set = muted), vibrato shape (bits 4-5)
    s15        bender range (bits 0-3), wheel assign (bits 4-5)
    s16        vibrato speed
    s17        wheel depth
    s18-s21    auto bend
    s22        vibrato pressure depth
    s23        vibrato depth
    s24-s28    LFO
    s29        pressure > frequency
    s30-s57    4 sources, interleaved
    s58-s101   4 amplifiers, interleaved
    s102-s129  2 filters, interleaved
    s130       checksum
"""

import logging
from dataclasses import dataclass, field
from typing import List

from k4manager.constants import NAME_LENGTH, SINGLE_PATCH_SIZE
from k4manager.errors import offset_context, require_length
from k4manager.models.amplifier import Amplifier
from k4manager.models.filter import Filter
from k4manager.models.lfo import LFO, Vibrato
from k4manager.models.modulation import AutoBend
from k4manager.models.name import PatchName
from k4manager.models.ranges import BENDER_RANGE, DEPTH, EFFECT_NUMBER, LEVEL
from k4manager.models.source import Source
from k4manager.models.types import PolyphonyMode, SourceMode, Submix, WheelAssign
from k4manager.utils.bits import bit_field, byte_from_bits, is_bit_set, set_bit
from k4manager.utils.checksum import add_checksum
from k4manager.utils.interleave import deinterleave, interleave
from k4manager.utils.validation import collect_errors

logger = logging.getLogger(__name__)

SOURCE_COUNT = 4
FILTER_COUNT = 2

SOURCES_OFFSET = 30
AMPLIFIERS_OFFSET = SOURCES_OFFSET + SOURCE_COUNT * Source.DATA_SIZE  # 58
FILTERS_OFFSET = AMPLIFIERS_OFFSET + SOURCE_COUNT * Amplifier.DATA_SIZE  # 102
CHECKSUM_OFFSET = FILTERS_OFFSET + FILTER_COUNT * Filter.DATA_SIZE  # 130


def _default_sources() -> List[Source]:
    return [Source() for _ in range(SOURCE_COUNT)]


def _default_amplifiers() -> List[Amplifier]:
    return [Amplifier() for _ in range(SOURCE_COUNT)]


def _default_filters() -> List[Filter]:
    return [Filter() for _ in range(FILTER_COUNT)]


@dataclass
class SinglePatch:
    """
    A K4 single patch.

    Attributes:
        name: Patch name (10 characters)
        volume: Patch volume (0-100)
        effect: Effect patch number (1-32)
        submix: Output submix channel
        source_mode: How the four sources are combined
        polyphony_mode: Voice assignment mode
        am12: Ring modulation of source 1 by source 2
        am34: Ring modulation of source 3 by source 4
        active_sources: True for each source that sounds
        bender_range: Pitch bend range in semitones (0-12)
        wheel_assign: Modulation wheel destination
        wheel_depth: Modulation wheel depth (-50 to +50)
        auto_bend: Auto bend settings
        vibrato: Vibrato settings
        lfo: LFO settings
        pressure_frequency: Pressure to pitch depth (-50 to +50)
        sources: Four sources
        amplifiers: Four amplifiers, one per source
        filters: Two filters (sources 1+2, sources 3+4)
    """

    name: PatchName = field(default_factory=lambda: PatchName("Single"))
    volume: int = 90
    effect: int = 1
    submix: Submix = Submix.A
    source_mode: SourceMode = SourceMode.NORMAL
    polyphony_mode: PolyphonyMode = PolyphonyMode.POLY1
    am12: bool = False
    am34: bool = False
    active_sources: List[bool] = field(default_factory=lambda: [True] * SOURCE_COUNT)
    bender_range: int = 0
    wheel_assign: WheelAssign = WheelAssign.CUTOFF
    wheel_depth: int = 0
    auto_bend: AutoBend = field(default_factory=AutoBend)
    vibrato: Vibrato = field(default_factory=Vibrato)
    lfo: LFO = field(default_factory=LFO)
    pressure_frequency: int = 0
    sources: List[Source] = field(default_factory=_default_sources)
    amplifiers: List[Amplifier] = field(default_factory=_default_amplifiers)
    filters: List[Filter] = field(default_factory=_default_filters)

    DATA_SIZE = SINGLE_PATCH_SIZE

    def __post_init__(self):
        if not isinstance(self.name, PatchName):
            self.name = PatchName(self.name)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SinglePatch":
        """
        Parse a single patch block.

        The trailing checksum byte is not verified here; see
        K4Reader for checksum reporting.

        Args:
            data: At least 131 bytes, starting at s0

        Returns:
            Parsed SinglePatch

        Raises:
            NotEnoughDataError: If data is shorter than 131 bytes
            InvalidDataError: If an enumeration index has no mapping
        """
        require_length(data, cls.DATA_SIZE)
        data = bytes(data[: cls.DATA_SIZE])

        s13 = data[13]
        s14 = data[14]
        s15 = data[15]

        vibrato_bytes = bytes([s14, data[16], data[22], data[23]])
        with offset_context(14):
            vibrato = Vibrato.from_bytes(vibrato_bytes)
        with offset_context(18):
            auto_bend = AutoBend.from_bytes(data[18:22])
        with offset_context(24):
            lfo = LFO.from_bytes(data[24:29])

        sources = []
        source_lanes = deinterleave(data[SOURCES_OFFSET:AMPLIFIERS_OFFSET], SOURCE_COUNT)
        for lane, lane_data in enumerate(source_lanes):
            with offset_context(SOURCES_OFFSET, stride=SOURCE_COUNT, lane=lane):
                sources.append(Source.from_bytes(lane_data))

        amplifiers = []
        amplifier_lanes = deinterleave(data[AMPLIFIERS_OFFSET:FILTERS_OFFSET], SOURCE_COUNT)
        for lane, lane_data in enumerate(amplifier_lanes):
            with offset_context(AMPLIFIERS_OFFSET, stride=SOURCE_COUNT, lane=lane):
                amplifiers.append(Amplifier.from_bytes(lane_data))

        filters = []
        filter_lanes = deinterleave(data[FILTERS_OFFSET:CHECKSUM_OFFSET], FILTER_COUNT)
        for lane, lane_data in enumerate(filter_lanes):
            with offset_context(FILTERS_OFFSET, stride=FILTER_COUNT, lane=lane):
                filters.append(Filter.from_bytes(lane_data))

        # The mute mask lives in s14, apart from the per-source bytes
        active_sources = [not is_bit_set(s14, i) for i in range(SOURCE_COUNT)]

        patch = cls(
            name=PatchName.from_bytes(data[0:NAME_LENGTH]),
            volume=LEVEL.decode(data[10] & 0x7F),
            effect=EFFECT_NUMBER.decode(bit_field(data[11], 0, 5)),
            submix=Submix.from_index(bit_field(data[12], 0, 3), offset=12),
            source_mode=SourceMode.from_index(bit_field(s13, 0, 2), offset=13),
            polyphony_mode=PolyphonyMode.from_index(bit_field(s13, 2, 4), offset=13),
            am12=is_bit_set(s13, 4),
            am34=is_bit_set(s13, 5),
            active_sources=active_sources,
            bender_range=bit_field(s15, 0, 4),
            wheel_assign=WheelAssign.from_index(bit_field(s15, 4, 6), offset=15),
            wheel_depth=DEPTH.decode(data[17] & 0x7F),
            auto_bend=auto_bend,
            vibrato=vibrato,
            lfo=lfo,
            pressure_frequency=DEPTH.decode(data[29] & 0x7F),
            sources=sources,
            amplifiers=amplifiers,
            filters=filters,
        )
        logger.debug(f"Parsed single patch '{patch.name.rstrip()}'")
        return patch

    def data(self) -> bytes:
        """
        Encode the patch without its checksum (s0-s129).

        Raises:
            ValidationError: If a value does not fit its wire field
        """
        s13 = byte_from_bits(self.source_mode.to_index(), 0, 2)
        s13 = byte_from_bits(self.polyphony_mode.to_index(), 2, 4, s13)
        if self.am12:
            s13 = set_bit(s13, 4)
        if self.am34:
            s13 = set_bit(s13, 5)

        vibrato = self.vibrato.to_bytes()

        s14 = vibrato[0]
        for i, active in enumerate(self.active_sources):
            if not active:
                s14 = set_bit(s14, i)

        s15 = byte_from_bits(BENDER_RANGE.encode(self.bender_range), 0, 4)
        s15 = byte_from_bits(self.wheel_assign.to_index(), 4, 6, s15)

        auto_bend = self.auto_bend.to_bytes()

        result = bytearray(PatchName(self.name).to_bytes())
        result.append(LEVEL.encode(self.volume))
        result.append(byte_from_bits(EFFECT_NUMBER.encode(self.effect), 0, 5))
        result.append(self.submix.to_index())
        result.append(s13)
        result.append(s14)
        result.append(s15)
        result.append(vibrato[1])
        result.append(DEPTH.encode(self.wheel_depth))
        result.extend(auto_bend)
        result.append(vibrato[2])
        result.append(vibrato[3])
        result.extend(self.lfo.to_bytes())
        result.append(DEPTH.encode(self.pressure_frequency))
        result.extend(interleave([source.to_bytes() for source in self.sources]))
        result.extend(interleave([amplifier.to_bytes() for amplifier in self.amplifiers]))
        result.extend(interleave([f.to_bytes() for f in self.filters]))

        return bytes(result)

    def to_bytes(self) -> bytes:
        """Encode the complete 131-byte block, checksum included."""
        return add_checksum(self.data())

    def validate(self) -> List[str]:
        """
        Check every value against its legal range.

        Returns:
            List of error messages (empty if the patch is valid)
        """
        checks = [
            ("volume", self.volume, LEVEL.low, LEVEL.high),
            ("effect", self.effect, EFFECT_NUMBER.low, EFFECT_NUMBER.high),
            ("bender range", self.bender_range, BENDER_RANGE.low, BENDER_RANGE.high),
            ("wheel depth", self.wheel_depth, DEPTH.low, DEPTH.high),
            ("pressure frequency", self.pressure_frequency, DEPTH.low, DEPTH.high),
        ]
        checks.extend(self.auto_bend.range_checks())
        checks.extend(self.vibrato.range_checks())
        checks.extend(self.lfo.range_checks())
        for i, source in enumerate(self.sources, 1):
            checks.extend(source.range_checks(f"S{i} "))
        for i, amplifier in enumerate(self.amplifiers, 1):
            checks.extend(amplifier.range_checks(f"DCA{i} "))
        for i, f in enumerate(self.filters, 1):
            checks.extend(f.range_checks(f"DCF{i} "))

        errors = collect_errors(checks)
        if len(self.sources) != SOURCE_COUNT:
            errors.append(f"Expected {SOURCE_COUNT} sources, got {len(self.sources)}")
        if len(self.amplifiers) != SOURCE_COUNT:
            errors.append(f"Expected {SOURCE_COUNT} amplifiers, got {len(self.amplifiers)}")
        if len(self.filters) != FILTER_COUNT:
            errors.append(f"Expected {FILTER_COUNT} filters, got {len(self.filters)}")
        return errors

    @property
    def active_source_string(self) -> str:
        """Active sources as e.g. '12--' (dash for a muted source)."""
        return "".join(
            str(i) if active else "-" for i, active in enumerate(self.active_sources, 1)
        )
