"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from k4manager.utils.checksum import add_checksum


# Single patch "Melo Vox 1" as dumped by a K4
MELO_VOX_1 = bytes.fromhex(
    # s0-s29 common
    "4d 65 6c 6f 20 56 6f 78 20 31 64 20 06 04 0c 02 1c 3f 39 31"
    "32 32 32 3d 00 30 00 32 32 32"
    # s30-s57 sources
    "00 00 02 03 00 00 50 40 12 12 7e 7f 4c 4c 5a 5b 00 34 02 03"
    "2c 37 34 35 02 02 15 11"
    # s58-s101 amplifiers
    "4b 4b 34 35 36 36 34 35 48 48 34 35 5a 5a 34 35 40 40 02 01"
    "41 41 35 36 32 32 35 36 2c 2c 35 36 32 32 35 36 32 32 35 36"
    "32 32 33 34"
    # s102-s129 filters
    "31 51 02 07 32 34 5b 34 32 34 36 34 32 33 56 01 64 02 32 63"
    "56 01 32 33 32 33 32 33"
    # s130 checksum
    "6e"
)

# Drum note: submix H, waves 97/192, decay 70/23, tune -34/-50, level 100/85
DRUM_NOTE = add_checksum(bytes.fromhex("70 01 60 3f 46 17 10 00 64 55"))

# Drum common: channel 10, volume 100, velocity depth +50
DRUM_COMMON = add_checksum(bytes([0x09, 0x64, 0x64]) + bytes(7))

# Effect patch: Reverb 1, parameters 7/5/31
EFFECT_PATCH = bytes.fromhex(
    "00 07 05 1f 04 05 06 07 08 40"
    "00 2d 00 03 2d 00 0b 2d 00 0e 2d 00"
    "00 64 00 0e 64 00 07 64 64 07 06 00"
    "30"
)


def make_multi(name: str) -> bytes:
    """Build a 77-byte multi patch block with eight default sections."""
    data = bytearray(name.encode("ascii").ljust(10))
    data.extend([0x50, 0x00])  # volume 80, effect 1
    for i in range(8):
        # single i, zone C-1 to G9, channel 1 + velocity ALL, submix A, level 100
        data.extend([i, 0x00, 0x7F, 0x20, 0x00, 0x64, 0x18, 0x32])
    return add_checksum(bytes(data))


def make_bank_payload() -> bytes:
    """Build a complete 15,114-byte bank payload."""
    payload = bytearray()
    for _ in range(64):
        payload.extend(MELO_VOX_1)
    for i in range(63):
        payload.extend(make_multi(f"Multi {i + 1}"))
    payload.extend(make_multi("Dwn@BgBryr"))
    payload.extend(DRUM_COMMON)
    for _ in range(61):
        payload.extend(DRUM_NOTE)
    for _ in range(32):
        payload.extend(EFFECT_PATCH)
    return bytes(payload)


def frame_message(function: int, sub1: int, sub2: int, payload: bytes, channel: int = 0) -> bytes:
    """Wrap a payload in a K4 message."""
    return bytes([0xF0, 0x40, channel, function, 0x00, 0x04, sub1, sub2]) + payload + b"\xf7"


@pytest.fixture
def melo_vox_data():
    """Return the 131-byte Melo Vox 1 single patch block."""
    return MELO_VOX_1


@pytest.fixture
def drum_note_data():
    """Return an 11-byte drum note block."""
    return DRUM_NOTE


@pytest.fixture
def effect_data():
    """Return a 35-byte effect patch block."""
    return EFFECT_PATCH


@pytest.fixture
def bank_payload():
    """Return a synthetic bank payload."""
    return make_bank_payload()


@pytest.fixture
def bank_message(bank_payload):
    """Return a complete all patch data dump message."""
    return frame_message(0x22, 0x00, 0x00, bank_payload)


@pytest.fixture
def bank_file(tmp_path, bank_message):
    """Write the bank dump to a temporary .syx file."""
    path = tmp_path / "bank.syx"
    path.write_bytes(bank_message)
    return path


@pytest.fixture
def single_message(melo_vox_data):
    """Return a one patch data dump of Melo Vox 1 to single A-3."""
    return frame_message(0x20, 0x00, 0x02, melo_vox_data)
