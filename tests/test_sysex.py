"""Tests for K4 SysEx framing, dump identification and the reader/writer."""

import logging

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import MELO_VOX_1, frame_message

from k4manager.errors import InvalidDataError, NotEnoughDataError, UnidentifiedError
from k4manager.formats.k4.header import Function, Header
from k4manager.formats.k4.reader import K4Reader, block_layout, verify_checksums
from k4manager.formats.k4.sysex_parser import (
    DumpKind,
    SysExParser,
    dump_request,
    frame,
    identify,
    substatus_for,
    unframe,
)
from k4manager.formats.k4.writer import K4Writer
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch
from k4manager.models.multi import MultiPatch
from k4manager.models.single import SinglePatch
from k4manager.models.types import Locality
from k4manager.utils.validation import ValidationError


class TestHeader:
    """Test cases for the 6-byte message header."""

    def test_decode(self):
        header = Header.from_bytes(bytes([0x02, 0x20, 0x00, 0x04, 0x00, 0x45]))
        assert header.channel == 3
        assert header.function == Function.ONE_PATCH_DATA_DUMP
        assert header.substatus1 == 0x00
        assert header.substatus2 == 0x45

    def test_encode(self):
        header = Header(channel=16, function=Function.ALL_PATCH_DATA_DUMP, substatus1=0x02)
        assert header.to_bytes() == bytes([0x0F, 0x22, 0x00, 0x04, 0x02, 0x00])

    def test_unknown_function(self):
        with pytest.raises(InvalidDataError) as exc_info:
            Header.from_bytes(bytes([0x00, 0x55, 0x00, 0x04, 0x00, 0x00]))
        assert exc_info.value.offset == 1

    def test_wrong_machine(self):
        with pytest.raises(InvalidDataError) as exc_info:
            Header.from_bytes(bytes([0x00, 0x20, 0x00, 0x05, 0x00, 0x00]))
        assert exc_info.value.offset == 2


class TestIdentify:
    """Test cases for dump identification."""

    @pytest.mark.parametrize(
        "function, sub1, sub2, kind, locality, number",
        [
            (Function.ALL_PATCH_DATA_DUMP, 0x00, 0x00, DumpKind.ALL, Locality.INTERNAL, None),
            (Function.ALL_PATCH_DATA_DUMP, 0x02, 0x00, DumpKind.ALL, Locality.EXTERNAL, None),
            (Function.ONE_PATCH_DATA_DUMP, 0x00, 0x05, DumpKind.ONE_SINGLE, Locality.INTERNAL, 5),
            (Function.ONE_PATCH_DATA_DUMP, 0x00, 0x7F, DumpKind.ONE_MULTI, Locality.INTERNAL, 63),
            (Function.ONE_PATCH_DATA_DUMP, 0x03, 0x20, DumpKind.DRUM, Locality.EXTERNAL, None),
            (Function.ONE_PATCH_DATA_DUMP, 0x01, 0x1F, DumpKind.ONE_EFFECT, Locality.INTERNAL, 31),
            (Function.BLOCK_PATCH_DATA_DUMP, 0x00, 0x40, DumpKind.BLOCK_MULTI, Locality.INTERNAL, None),
            (Function.BLOCK_PATCH_DATA_DUMP, 0x01, 0x00, DumpKind.BLOCK_EFFECT, Locality.INTERNAL, None),
        ],
    )
    def test_identify(self, function, sub1, sub2, kind, locality, number):
        identity = identify(Header(function=function, substatus1=sub1, substatus2=sub2))
        assert identity.kind == kind
        assert identity.locality == locality
        assert identity.number == number

    def test_unidentified(self):
        with pytest.raises(UnidentifiedError):
            identify(Header(function=Function.ONE_PATCH_DATA_DUMP, substatus1=0x01, substatus2=0x21))
        with pytest.raises(UnidentifiedError):
            identify(Header(function=Function.WRITE_COMPLETE))

    def test_substatus_is_inverse(self):
        for kind, number in [(DumpKind.ONE_MULTI, 10), (DumpKind.ONE_EFFECT, 3), (DumpKind.DRUM, 0)]:
            sub1, sub2 = substatus_for(kind, Locality.EXTERNAL, number)
            header = Header(function=Function.ONE_PATCH_DATA_DUMP, substatus1=sub1, substatus2=sub2)
            identity = identify(header)
            assert identity.kind == kind
            assert identity.locality == Locality.EXTERNAL

    def test_substatus_bad_number(self):
        with pytest.raises(ValueError):
            substatus_for(DumpKind.ONE_EFFECT, Locality.INTERNAL, 32)


class TestFraming:
    """Test cases for framing and unframing messages."""

    def test_frame_unframe(self):
        header = Header(channel=2, function=Function.ONE_PATCH_DATA_DUMP, substatus2=3)
        message = frame(header, MELO_VOX_1)
        assert message[:8] == bytes([0xF0, 0x40, 0x01, 0x20, 0x00, 0x04, 0x00, 0x03])
        assert message[-1] == 0xF7
        decoded_header, payload = unframe(message)
        assert decoded_header == header
        assert payload == MELO_VOX_1

    def test_too_short(self):
        with pytest.raises(NotEnoughDataError):
            unframe(bytes([0xF0, 0x40, 0x00, 0xF7]))

    def test_not_kawai(self):
        with pytest.raises(InvalidDataError) as exc_info:
            unframe(bytes([0xF0, 0x43, 0x00, 0x20, 0x00, 0x04, 0x00, 0x00, 0xF7]))
        assert exc_info.value.offset == 1

    def test_missing_end(self):
        with pytest.raises(InvalidDataError) as exc_info:
            unframe(bytes([0xF0, 0x40, 0x00, 0x20, 0x00, 0x04, 0x00, 0x00, 0x00]))
        assert exc_info.value.offset == 8

    def test_header_error_offset(self):
        """Header errors are reported relative to the message start."""
        with pytest.raises(InvalidDataError) as exc_info:
            unframe(bytes([0xF0, 0x40, 0x00, 0x20, 0x00, 0x7F, 0x00, 0x00, 0xF7]))
        assert exc_info.value.offset == 4

    def test_dump_request(self):
        assert dump_request(1, DumpKind.ALL) == bytes.fromhex("f0 40 00 02 00 04 00 00 f7")
        assert dump_request(1, DumpKind.ONE_SINGLE, number=5) == bytes.fromhex(
            "f0 40 00 00 00 04 00 05 f7"
        )
        assert dump_request(3, DumpKind.DRUM, Locality.EXTERNAL) == bytes.fromhex(
            "f0 40 02 00 00 04 03 20 f7"
        )
        assert dump_request(1, DumpKind.BLOCK_MULTI)[3] == 0x01


class TestSysExParser:
    """Test cases for splitting SysEx streams."""

    def test_parse_multiple(self, single_message):
        request = dump_request(1, DumpKind.ALL)
        messages = SysExParser().parse_bytes(request + single_message)
        assert len(messages) == 2
        assert not messages[0].is_dump
        assert messages[1].is_dump
        assert messages[1].payload == MELO_VOX_1

    def test_skips_other_manufacturers(self, single_message):
        yamaha = bytes([0xF0, 0x43, 0x10, 0x5F, 0x00, 0x00, 0x00, 0x01, 0xF7])
        parser = SysExParser()
        messages = parser.parse_bytes(yamaha + single_message)
        assert len(messages) == 1
        assert parser.skipped == 1


class TestK4Reader:
    """Test cases for reading dumps."""

    def test_read_bank(self, bank_file):
        dump = K4Reader.read(bank_file)
        assert dump.kind == DumpKind.ALL
        assert dump.locality == Locality.INTERNAL
        assert dump.checksums_valid
        assert len(dump.payload) == 15114

        bank = dump.model
        assert bank.singles[0].name == "Melo Vox 1"
        assert bank.multis[63].name == "Dwn@BgBryr"
        assert bank.drum.common.channel == 10
        assert bank.drum.common.velocity_depth == 50
        assert bank.effects[31].param3 == 31

    def test_read_single(self, single_message):
        dump = K4Reader().parse_bytes(single_message)
        assert dump.kind == DumpKind.ONE_SINGLE
        assert dump.number == 2
        assert dump.model.name == "Melo Vox 1"

    def test_bad_checksum_reported(self, bank_message, caplog):
        data = bytearray(bank_message)
        data[8 + 130] ^= 0x01
        with caplog.at_level(logging.WARNING):
            dump = K4Reader().parse_bytes(bytes(data))
        assert dump.bad_checksums == ["single A-1"]
        assert dump.model.singles[0].name == "Melo Vox 1"
        assert "Checksum mismatch in single A-1" in caplog.text

    def test_trailing_bytes_ignored(self, caplog):
        message = frame_message(0x20, 0x00, 0x00, MELO_VOX_1 + b"\x00\x00")
        with caplog.at_level(logging.WARNING):
            dump = K4Reader().parse_bytes(message)
        assert len(dump.payload) == 131
        assert "trailing" in caplog.text

    def test_short_payload(self):
        message = frame_message(0x20, 0x00, 0x00, MELO_VOX_1[:100])
        with pytest.raises(NotEnoughDataError):
            K4Reader().parse_bytes(message)

    def test_error_offset_in_bank(self, bank_message):
        """An unmapped value is reported at its offset in the bank payload."""
        data = bytearray(bank_message)
        data[8 + 8384 + 12 + 3] = 0x30
        with pytest.raises(InvalidDataError) as exc_info:
            K4Reader().parse_bytes(bytes(data))
        assert exc_info.value.offset == 8384 + 15

    def test_no_dump(self):
        with pytest.raises(UnidentifiedError):
            K4Reader().parse_bytes(dump_request(1, DumpKind.ALL))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            K4Reader.read(tmp_path / "missing.syx")

    def test_block_layout(self):
        blocks = list(block_layout(DumpKind.ALL))
        assert len(blocks) == 64 + 64 + 1 + 61 + 32
        assert blocks[0] == ("single A-1", 0, 131)
        assert blocks[127] == ("multi D-16", 8384 + 63 * 77, 77)
        assert blocks[128] == ("drum common", 13312, 11)
        assert blocks[129][0] == "drum note C2"
        assert blocks[-1] == ("effect 32", 13994 + 31 * 35, 35)

    def test_verify_checksums(self, bank_payload):
        results = verify_checksums(DumpKind.ALL, bank_payload)
        assert len(results) == 222
        assert all(valid for _, valid in results)


class TestK4Writer:
    """Test cases for writing dumps."""

    def test_write_bank_round_trip(self, bank_file, tmp_path):
        bank = K4Reader.read(bank_file).model
        output = tmp_path / "out" / "bank.syx"
        K4Writer.write(bank, output)

        dump = K4Reader.read(output)
        assert dump.kind == DumpKind.ALL
        assert dump.checksums_valid
        assert dump.model == bank

    def test_one_patch_headers(self):
        writer = K4Writer()
        assert writer.to_bytes(SinglePatch(), 5)[:8] == bytes.fromhex("f0 40 00 20 00 04 00 05")
        assert writer.to_bytes(MultiPatch(), 3)[6:8] == bytes([0x00, 0x43])
        assert writer.to_bytes(EffectPatch(), 2)[6:8] == bytes([0x01, 0x02])
        assert writer.to_bytes(Drum())[6:8] == bytes([0x01, 0x20])

    def test_external_channel(self):
        writer = K4Writer(channel=10, locality=Locality.EXTERNAL)
        message = writer.to_bytes(Drum())
        assert message[2] == 0x09
        assert message[6] == 0x03
        assert len(message) == 8 + 682 + 1

    def test_block_dump(self):
        message = K4Writer().to_bytes([EffectPatch() for _ in range(32)])
        assert message[3] == 0x21
        assert len(message) == 8 + 32 * 35 + 1
        dump = K4Reader().parse_bytes(message)
        assert dump.kind == DumpKind.BLOCK_EFFECT
        assert len(dump.model) == 32

    def test_incomplete_block(self):
        with pytest.raises(ValidationError):
            K4Writer().to_bytes([SinglePatch() for _ in range(10)])

    def test_unknown_model(self):
        with pytest.raises(TypeError):
            K4Writer().to_bytes("not a patch")

    def test_bad_channel(self):
        with pytest.raises(ValidationError):
            K4Writer(channel=0)
