"""Tests for single patch decoding and encoding."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from k4manager.errors import InvalidDataError, NotEnoughDataError
from k4manager.models.amplifier import Amplifier
from k4manager.models.envelope import AmplifierEnvelope, FilterEnvelope
from k4manager.models.filter import Filter
from k4manager.models.lfo import LFO, Vibrato
from k4manager.models.modulation import AutoBend, LevelModulation, TimeModulation
from k4manager.models.single import SinglePatch
from k4manager.models.source import Source
from k4manager.models.types import (
    KeyScalingCurve,
    LFOShape,
    PolyphonyMode,
    SourceMode,
    Submix,
    VelocityCurve,
    WheelAssign,
)
from k4manager.utils.checksum import verify_block
from k4manager.utils.validation import ValidationError


class TestBlocks:
    """Test cases for envelope, modulation and LFO blocks."""

    def test_amplifier_envelope(self):
        env = AmplifierEnvelope.from_bytes(bytes([54, 72, 90, 64]))
        assert (env.attack, env.decay, env.sustain, env.release) == (54, 72, 90, 64)
        assert env.to_bytes() == bytes([54, 72, 90, 64])

    def test_filter_envelope_sustain_is_signed(self):
        env = FilterEnvelope.from_bytes(bytes([86, 100, 0x32, 86]))
        assert env.sustain == 0
        env = FilterEnvelope.from_bytes(bytes([0, 0, 0, 0]))
        assert env.sustain == -50
        assert FilterEnvelope(sustain=25).to_bytes()[2] == 75

    def test_level_modulation(self):
        mod = LevelModulation.from_bytes(bytes([0x41, 0x32, 0x2C]))
        assert mod == LevelModulation(velocity_depth=15, pressure_depth=0, key_scaling_depth=-6)
        assert mod.to_bytes() == bytes([0x41, 0x32, 0x2C])

    def test_time_modulation(self):
        mod = TimeModulation(attack_velocity=-50, release_velocity=50, key_scaling=0)
        assert mod.to_bytes() == bytes([0, 100, 50])

    def test_auto_bend(self):
        bend = AutoBend.from_bytes(bytes([0x39, 0x31, 0x32, 0x32]))
        assert bend.time == 57
        assert bend.depth == -1

    def test_lfo(self):
        lfo = LFO.from_bytes(bytes([0x02, 0x30, 0x00, 0x3C, 0x32]))
        assert lfo.shape == LFOShape.SQUARE
        assert lfo.speed == 48
        assert lfo.depth == 10
        assert lfo.to_bytes() == bytes([0x02, 0x30, 0x00, 0x3C, 0x32])

    def test_vibrato_ignores_mute_bits(self):
        vibrato = Vibrato.from_bytes(bytes([0x2F, 0x1C, 0x32, 0x3D]))
        assert vibrato.shape == LFOShape.SQUARE
        assert vibrato.speed == 28
        assert vibrato.pressure_depth == 0
        assert vibrato.depth == 11
        assert vibrato.to_bytes()[0] == 0x20

    def test_short_block(self):
        with pytest.raises(NotEnoughDataError):
            LevelModulation.from_bytes(bytes(2))


class TestSource:
    """Test cases for the source codec."""

    def test_decode(self):
        source = Source.from_bytes(bytes([0x00, 0x00, 0x12, 0x4C, 0x00, 0x2C, 0x02]))
        assert source.delay == 0
        assert source.wave_number == 19
        assert source.key_scaling_curve == KeyScalingCurve.CURVE1
        assert source.key_track
        assert source.coarse == -12
        assert source.fixed_key == 0
        assert source.fine == -6
        assert not source.pressure_frequency
        assert source.vibrato
        assert source.velocity_curve == VelocityCurve.CURVE1

    def test_decode_packed_fields(self):
        source = Source.from_bytes(bytes([0x02, 0x50, 0x7E, 0x5A, 0x02, 0x34, 0x15]))
        assert source.wave_number == 127
        assert source.key_scaling_curve == KeyScalingCurve.CURVE6
        assert source.coarse == 2
        assert source.pressure_frequency
        assert not source.vibrato
        assert source.velocity_curve == VelocityCurve.CURVE6

    def test_high_wave_number(self):
        source = Source(wave_number=256, key_scaling_curve=KeyScalingCurve.CURVE8)
        data = source.to_bytes()
        assert data[1] == 0x71
        assert data[2] == 0x7F
        assert Source.from_bytes(data) == source

    def test_key_track_off(self):
        source = Source(key_track=False, coarse=-24, fixed_key=72)
        data = source.to_bytes()
        assert data[3] == 0x00
        assert Source.from_bytes(data).fixed_key_name == "C5"

    def test_encode_out_of_range(self):
        with pytest.raises(ValidationError):
            Source(fine=80).to_bytes()


class TestAmplifierAndFilter:
    """Test cases for amplifier and filter codecs."""

    def test_amplifier(self):
        data = bytes([0x4B, 0x36, 0x48, 0x5A, 0x40, 0x41, 0x32, 0x2C, 0x32, 0x32, 0x32])
        amp = Amplifier.from_bytes(data)
        assert amp.level == 75
        assert amp.envelope == AmplifierEnvelope(54, 72, 90, 64)
        assert amp.level_modulation.velocity_depth == 15
        assert amp.level_modulation.key_scaling_depth == -6
        assert amp.time_modulation == TimeModulation()
        assert amp.to_bytes() == data

    def test_filter(self):
        data = bytes([0x31, 0x02, 0x32, 0x5B, 0x32, 0x36, 0x32, 0x56, 0x64, 0x32, 0x56, 0x32, 0x32, 0x32])
        f = Filter.from_bytes(data)
        assert f.cutoff == 49
        assert f.resonance == 2
        assert not f.lfo_modulates_cutoff
        assert f.cutoff_modulation == LevelModulation(0, 41, 0)
        assert f.envelope_depth == 4
        assert f.envelope == FilterEnvelope(86, 100, 0, 86)
        assert f.to_bytes() == data

    def test_filter_lfo_flag_shares_resonance_byte(self):
        f = Filter(resonance=7, lfo_modulates_cutoff=True)
        assert f.to_bytes()[1] == 0x0F
        decoded = Filter.from_bytes(f.to_bytes())
        assert decoded.resonance == 7
        assert decoded.lfo_modulates_cutoff


class TestSinglePatch:
    """Test cases for the full single patch."""

    def test_decode_common(self, melo_vox_data):
        patch = SinglePatch.from_bytes(melo_vox_data)
        assert patch.name == "Melo Vox 1"
        assert patch.volume == 100
        assert patch.effect == 1
        assert patch.submix == Submix.G
        assert patch.source_mode == SourceMode.NORMAL
        assert patch.polyphony_mode == PolyphonyMode.POLY2
        assert not patch.am12
        assert not patch.am34
        assert patch.active_sources == [True, True, False, False]
        assert patch.active_source_string == "12--"
        assert patch.bender_range == 2
        assert patch.wheel_assign == WheelAssign.VIBRATO
        assert patch.wheel_depth == 13
        assert patch.auto_bend.time == 57
        assert patch.auto_bend.depth == -1
        assert patch.pressure_frequency == 0

    def test_decode_vibrato_and_lfo(self, melo_vox_data):
        patch = SinglePatch.from_bytes(melo_vox_data)
        assert patch.vibrato == Vibrato(shape=LFOShape.TRIANGLE, speed=28, depth=11, pressure_depth=0)
        assert patch.lfo.shape == LFOShape.TRIANGLE
        assert patch.lfo.speed == 48

    def test_decode_sources(self, melo_vox_data):
        patch = SinglePatch.from_bytes(melo_vox_data)
        assert [s.wave_number for s in patch.sources] == [19, 19, 127, 128]
        assert patch.sources[0].coarse == -12
        assert patch.sources[0].fine == -6
        assert patch.sources[1].fine == 5
        assert patch.sources[2].key_scaling_curve == KeyScalingCurve.CURVE6
        assert patch.sources[2].pressure_frequency
        assert not patch.sources[2].vibrato

    def test_decode_amplifiers_and_filters(self, melo_vox_data):
        patch = SinglePatch.from_bytes(melo_vox_data)
        assert patch.amplifiers[0].level == 75
        assert patch.amplifiers[0].envelope == AmplifierEnvelope(54, 72, 90, 64)
        assert patch.filters[0].cutoff == 49
        assert patch.filters[0].resonance == 2
        assert patch.filters[1].cutoff == 81
        assert patch.filters[1].resonance == 7

    def test_reencode(self, melo_vox_data):
        """Re-encoding keeps every byte except the unused bits of s11."""
        patch = SinglePatch.from_bytes(melo_vox_data)
        data = patch.to_bytes()
        assert len(data) == 131
        assert data[:11] == melo_vox_data[:11]
        assert data[11] == 0x00
        assert data[12:130] == melo_vox_data[12:130]
        assert verify_block(data)
        assert SinglePatch.from_bytes(data) == patch

    def test_data_has_no_checksum(self):
        patch = SinglePatch()
        assert len(patch.data()) == 130
        assert patch.to_bytes()[:130] == patch.data()

    def test_default_patch_round_trip(self):
        patch = SinglePatch(name="Init")
        assert patch.name == "Init      "
        assert SinglePatch.from_bytes(patch.to_bytes()) == patch

    def test_rename_then_encode(self, melo_vox_data):
        patch = SinglePatch.from_bytes(melo_vox_data)
        patch.name = "New Lead"
        data = patch.to_bytes()
        assert data[:10] == b"New Lead  "
        assert verify_block(data)
        assert SinglePatch.from_bytes(data).name == "New Lead  "

    def test_muted_sources_set_bits(self):
        patch = SinglePatch(active_sources=[True, False, True, False])
        assert patch.data()[14] & 0x0F == 0b1010

    def test_effect_number_wire(self):
        patch = SinglePatch(effect=32)
        assert patch.data()[11] == 31

    def test_short_data(self, melo_vox_data):
        with pytest.raises(NotEnoughDataError):
            SinglePatch.from_bytes(melo_vox_data[:130])

    def test_invalid_source_mode_offset(self, melo_vox_data):
        data = bytearray(melo_vox_data)
        data[13] = 0x03
        with pytest.raises(InvalidDataError) as exc_info:
            SinglePatch.from_bytes(bytes(data))
        assert exc_info.value.offset == 13

    def test_invalid_wheel_assign_offset(self, melo_vox_data):
        data = bytearray(melo_vox_data)
        data[15] = 0x32
        with pytest.raises(InvalidDataError) as exc_info:
            SinglePatch.from_bytes(bytes(data))
        assert exc_info.value.offset == 15

    def test_bad_checksum_still_parses(self, melo_vox_data):
        data = bytearray(melo_vox_data)
        data[130] = 0x00
        assert SinglePatch.from_bytes(bytes(data)).name == "Melo Vox 1"

    def test_validate(self, melo_vox_data):
        assert SinglePatch.from_bytes(melo_vox_data).validate() == []
        patch = SinglePatch(volume=120, bender_range=13)
        errors = patch.validate()
        assert len(errors) == 2
        assert any("volume" in e for e in errors)

    def test_encode_rejects_bad_value(self):
        with pytest.raises(ValidationError):
            SinglePatch(volume=200).to_bytes()
