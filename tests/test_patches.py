"""Tests for multi, drum and effect patches."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_multi

from k4manager.errors import InvalidDataError, NotEnoughDataError
from k4manager.models.drum import Drum, DrumCommon, DrumNote, DrumSource
from k4manager.models.effect import EffectPatch, SubmixSettings
from k4manager.models.multi import MultiPatch, Section
from k4manager.models.types import EffectType, PlayMode, Submix, VelocitySwitch
from k4manager.utils.checksum import verify_block


class TestSection:
    """Test cases for multi sections."""

    def test_decode(self):
        section = Section.from_bytes(bytes([0x05, 0x24, 0x60, 0x49, 0x0B, 0x50, 0x1B, 0x2D]))
        assert section.single_patch_number == 5
        assert section.zone_low == 36
        assert section.zone_high == 96
        assert section.channel == 10
        assert section.velocity_switch == VelocitySwitch.SOFT
        assert section.muted
        assert section.submix == Submix.D
        assert section.play_mode == PlayMode.MIDI
        assert section.level == 80
        assert section.transpose == 3
        assert section.tune == -5
        assert section.zone_name == "C2 - C7"

    def test_encode_packs_m15_and_m16(self):
        section = Section(channel=16, velocity_switch=VelocitySwitch.LOUD, muted=True,
                          submix=Submix.H, play_mode=PlayMode.MIX)
        data = section.to_bytes()
        assert data[3] == 0x5F
        assert data[4] == 0x17
        assert Section.from_bytes(data) == section

    def test_defaults(self):
        section = Section()
        assert (section.zone_low, section.zone_high) == (0, 127)
        assert section.velocity_switch == VelocitySwitch.ALL

    def test_invalid_velocity_switch(self):
        with pytest.raises(InvalidDataError) as exc_info:
            Section.from_bytes(bytes([0, 0, 127, 0x30, 0, 100, 24, 50]))
        assert exc_info.value.offset == 3

    def test_invalid_play_mode(self):
        with pytest.raises(InvalidDataError) as exc_info:
            Section.from_bytes(bytes([0, 0, 127, 0x20, 0x18, 100, 24, 50]))
        assert exc_info.value.offset == 4


class TestMultiPatch:
    """Test cases for multi patches."""

    def test_decode(self):
        patch = MultiPatch.from_bytes(make_multi("Dwn@BgBryr"))
        assert patch.name == "Dwn@BgBryr"
        assert patch.volume == 80
        assert patch.effect == 1
        assert len(patch.sections) == 8
        assert patch.sections[7].single_patch_number == 7
        assert patch.sections[0].velocity_switch == VelocitySwitch.ALL

    def test_round_trip(self):
        data = make_multi("Split")
        patch = MultiPatch.from_bytes(data)
        assert patch.to_bytes() == data
        assert len(patch.data()) == 76

    def test_rename_then_encode(self):
        patch = MultiPatch()
        patch.name = "Layered"
        data = patch.to_bytes()
        assert data[:10] == b"Layered   "
        assert MultiPatch.from_bytes(data).name == "Layered   "

    def test_section_error_offset(self):
        """An error in section 3 is reported at its byte in the patch."""
        data = bytearray(make_multi("Broken"))
        data[12 + 2 * 8 + 3] = 0x30
        with pytest.raises(InvalidDataError) as exc_info:
            MultiPatch.from_bytes(bytes(data))
        assert exc_info.value.offset == 31

    def test_short_data(self):
        with pytest.raises(NotEnoughDataError):
            MultiPatch.from_bytes(bytes(76))

    def test_validate(self):
        patch = MultiPatch()
        assert patch.validate() == []
        patch.sections[0].transpose = 30
        assert patch.validate() == ["section 1 transpose must be -24-24, got 30"]


class TestDrum:
    """Test cases for the drum kit."""

    def test_note_decode(self, drum_note_data):
        note = DrumNote.from_bytes(drum_note_data)
        assert note.submix == Submix.H
        assert note.source1 == DrumSource(wave_number=97, decay=70, tune=-34, level=100)
        assert note.source2 == DrumSource(wave_number=192, decay=23, tune=-50, level=85)

    def test_note_round_trip(self, drum_note_data):
        note = DrumNote.from_bytes(drum_note_data)
        assert note.to_bytes() == drum_note_data
        assert verify_block(note.to_bytes())

    def test_common(self):
        common = DrumCommon.from_bytes(bytes([0x09, 0x64, 0x64]) + bytes(8))
        assert common.channel == 10
        assert common.volume == 100
        assert common.velocity_depth == 50

    def test_common_encodes_depth_with_offset(self):
        data = DrumCommon(channel=1, volume=80, velocity_depth=-10).to_bytes()
        assert data[:3] == bytes([0x00, 0x50, 0x28])
        assert data[3:10] == bytes(7)
        assert len(data) == 11

    def test_drum(self, bank_payload):
        drum = Drum.from_bytes(bank_payload[13312:13994])
        assert drum.common.channel == 10
        assert len(drum.notes) == 61
        assert drum.notes[60].source2.wave_number == 192
        assert len(drum.to_bytes()) == 682
        assert drum.to_bytes() == bank_payload[13312:13994]

    def test_note_names(self):
        assert Drum.key_for_note(0) == 36
        assert Drum.note_name_for(0) == "C2"
        assert Drum.note_name_for(60) == "C7"

    def test_short_data(self):
        with pytest.raises(NotEnoughDataError):
            Drum.from_bytes(bytes(681))

    def test_validate(self):
        drum = Drum()
        assert drum.validate() == []
        drum.notes[0].source1.level = 101
        assert drum.validate() == ["C2 S1 level must be 0-100, got 101"]


class TestEffectPatch:
    """Test cases for effect patches."""

    def test_decode(self, effect_data):
        patch = EffectPatch.from_bytes(effect_data)
        assert patch.effect_type == EffectType.REVERB_1
        assert (patch.param1, patch.param2, patch.param3) == (7, 5, 31)
        assert patch.submixes[0] == SubmixSettings(pan=-7, send1=45, send2=0)
        assert patch.submix(Submix.D) == SubmixSettings(pan=7, send1=45, send2=0)
        assert patch.submix(Submix.G) == SubmixSettings(pan=0, send1=100, send2=100)

    def test_reserved_bytes_emitted_as_zero(self, effect_data):
        patch = EffectPatch.from_bytes(effect_data)
        data = patch.to_bytes()
        assert len(data) == 35
        assert data[:4] == effect_data[:4]
        assert data[4:10] == bytes(6)
        assert data[10:34] == effect_data[10:34]
        assert verify_block(data)
        assert EffectPatch.from_bytes(data) == patch

    def test_effect_type_out_of_range(self, effect_data):
        data = bytearray(effect_data)
        data[0] = 16
        with pytest.raises(InvalidDataError) as exc_info:
            EffectPatch.from_bytes(bytes(data))
        assert exc_info.value.offset == 0

    def test_effect_type_wire_index(self):
        patch = EffectPatch(effect_type=EffectType.CHORUS_STEREO_PANPOT_DELAY)
        assert patch.data()[0] == 15

    def test_validate(self, effect_data):
        assert EffectPatch.from_bytes(effect_data).validate() == []
        patch = EffectPatch(param1=9)
        assert patch.validate() == ["effect parameter 1 must be 0-7, got 9"]
