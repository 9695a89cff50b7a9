"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from falcon8.layout import FALCON8_LAYOUT
from falcon8.models import ButtonBinding, ButtonBindings, ProgramStep

# Filler byte for fake firmware images so untouched and zeroed bytes differ
FILLER = 0xAA


@pytest.fixture
def blank_firmware() -> bytearray:
    """Create a fake firmware image just large enough for the layout."""
    return bytearray([FILLER]) * FALCON8_LAYOUT.required_size


@pytest.fixture
def sample_bindings() -> ButtonBindings:
    """Create a valid set of bindings using every binding variant."""
    return ButtonBindings(
        buttons=(
            ButtonBinding.for_key(0x04),
            ButtonBinding.for_program(
                ProgramStep(modifier=0x00, delay_ms=10, keys=(0x04, 0x05))
            ),
            ButtonBinding.for_character("c"),
            ButtonBinding.for_key(0x68),
            ButtonBinding.for_character("1"),
            ButtonBinding.for_key(0x28),
            ButtonBinding.for_program(
                ProgramStep(modifier=0x01, delay_ms=20, keys=(0x06,)),
                ProgramStep(modifier=0x01, delay_ms=20, keys=(0x19,)),
            ),
            ButtonBinding.for_key(0x2C),
        )
    )


@pytest.fixture
def firmware_file(tmp_path: Path, blank_firmware: bytearray) -> Path:
    """Write a fake firmware image to disk."""
    path = tmp_path / "firmware.bin"
    path.write_bytes(bytes(blank_firmware))
    return path
