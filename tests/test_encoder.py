"""Tests for encoder module."""

import pytest

from falcon8.encoder import encode_binding, encode_firmware, encode_program
from falcon8.exceptions import EncoderInvariantError
from falcon8.keycodes import CHARACTER_KEYCODES
from falcon8.layout import FALCON8_LAYOUT
from falcon8.models import ButtonBinding, ButtonBindings, Program, ProgramStep

# Same filler byte as the blank_firmware fixture
FILLER = 0xAA

REGION = FALCON8_LAYOUT.program_region_size


def _region(buffer: bytearray, number: int) -> bytearray:
    start = FALCON8_LAYOUT.button(number).program_offset
    return buffer[start : start + REGION]


class TestEncodeFirmware:
    """Tests for encode_firmware function."""

    def test_example_bindings(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Should write a key byte, a program sentinel and the program slots."""
        encode_firmware(blank_firmware, sample_bindings)

        assert blank_firmware[0x5189] == 0x04
        assert blank_firmware[0x5181] == 0xD8

        region = _region(blank_firmware, 2)
        assert region[0:8] == bytes([0x00, 0x0A, 0x04, 0x05, 0x00, 0x00, 0x00, 0x00])
        assert region[8:16] == bytes([0xFD, 0, 0, 0, 0, 0, 0, 0])
        assert region[16:] == bytes(REGION - 16)

    def test_writes_every_button(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Should write the expected byte at each button offset."""
        encode_firmware(blank_firmware, sample_bindings)
        offsets = [b.offset for b in FALCON8_LAYOUT.buttons]
        assert [blank_firmware[o] for o in offsets] == [
            0x04,
            0xD8,
            0x06,
            0x68,
            0x1E,
            0x28,
            0xDD,
            0x2C,
        ]

    def test_key_buttons_leave_program_regions_alone(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Non-program buttons should not touch their program region."""
        encode_firmware(blank_firmware, sample_bindings)
        assert _region(blank_firmware, 1) == bytes([FILLER]) * REGION

    def test_untouched_bytes_preserved(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Bytes outside button offsets and program regions should not change."""
        encode_firmware(blank_firmware, sample_bindings)
        assert blank_firmware[0] == FILLER
        assert blank_firmware[0x5188] == FILLER
        assert blank_firmware[0x539B] == FILLER

    def test_idempotent(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Encoding twice into copies of one image should give equal bytes."""
        first = bytearray(blank_firmware)
        second = bytearray(blank_firmware)
        encode_firmware(first, sample_bindings)
        encode_firmware(second, sample_bindings)
        assert first == second

        encode_firmware(first, sample_bindings)
        assert first == second

    def test_does_not_resize(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """The buffer length should never change."""
        size = len(blank_firmware)
        encode_firmware(blank_firmware, sample_bindings)
        assert len(blank_firmware) == size

    def test_unset_binding_is_fatal(
        self, blank_firmware: bytearray, sample_bindings: ButtonBindings
    ) -> None:
        """Reaching an unvalidated binding should raise an invariant error."""
        bindings = sample_bindings.replace(4, ButtonBinding())
        with pytest.raises(EncoderInvariantError, match="button 4"):
            encode_firmware(blank_firmware, bindings)

    def test_invariant_error_is_not_user_error(self) -> None:
        """The invariant error should sit outside the recoverable hierarchy."""
        from falcon8.exceptions import Falcon8Error

        assert not issubclass(EncoderInvariantError, Falcon8Error)


class TestEncodeBinding:
    """Tests for encode_binding function."""

    @pytest.mark.parametrize(("char", "keycode"), list(CHARACTER_KEYCODES.items()))
    def test_character_matches_direct_key(
        self, blank_firmware: bytearray, char: str, keycode: int
    ) -> None:
        """A character should encode exactly like its resolved keycode."""
        button = FALCON8_LAYOUT.button(3)
        by_char = bytearray(blank_firmware)
        by_key = bytearray(blank_firmware)

        encode_binding(by_char, ButtonBinding.for_character(char), button)
        encode_binding(by_key, ButtonBinding.for_key(keycode), button)

        assert by_char == by_key
        assert by_char[button.offset] == keycode

    def test_unresolvable_character_is_fatal(self, blank_firmware: bytearray) -> None:
        """An unsupported character reaching the encoder should be fatal."""
        button = FALCON8_LAYOUT.button(1)
        with pytest.raises(EncoderInvariantError):
            encode_binding(blank_firmware, ButtonBinding.for_character("!"), button)

    def test_several_variants_is_fatal(self, blank_firmware: bytearray) -> None:
        """A binding with two variants should be fatal."""
        button = FALCON8_LAYOUT.button(1)
        with pytest.raises(EncoderInvariantError):
            encode_binding(blank_firmware, ButtonBinding(key=4, character="a"), button)


class TestEncodeProgram:
    """Tests for encode_program function."""

    OFFSET = 0x539C

    def test_pads_unused_keys(self, blank_firmware: bytearray) -> None:
        """Unused key positions should be 0x00 without touching modifier/delay."""
        program = Program(
            steps=(
                ProgramStep(modifier=0x02, delay_ms=0xFF, keys=(0x04,)),
                ProgramStep(modifier=0x05, delay_ms=0x01, keys=()),
            )
        )
        encode_program(blank_firmware, program, self.OFFSET)

        start = self.OFFSET
        assert blank_firmware[start : start + 8] == bytes(
            [0x02, 0xFF, 0x04, 0, 0, 0, 0, 0]
        )
        assert blank_firmware[start + 8 : start + 16] == bytes(
            [0x05, 0x01, 0, 0, 0, 0, 0, 0]
        )

    def test_full_step(self, blank_firmware: bytearray) -> None:
        """A 6-key step should fill the whole slot."""
        step = ProgramStep(modifier=0x01, delay_ms=5, keys=(4, 5, 6, 7, 8, 9))
        encode_program(blank_firmware, Program(steps=(step,)), self.OFFSET)
        assert blank_firmware[self.OFFSET : self.OFFSET + 8] == bytes(
            [1, 5, 4, 5, 6, 7, 8, 9]
        )

    def test_terminator_and_scrub(self, blank_firmware: bytearray) -> None:
        """Stop sentinel should follow the last step and zeros fill the rest."""
        program = Program(steps=tuple(ProgramStep(keys=(0x04,)) for _ in range(3)))
        encode_program(blank_firmware, program, self.OFFSET)

        stop_at = self.OFFSET + 3 * 8
        assert blank_firmware[stop_at] == 0xFD
        assert blank_firmware[stop_at + 1 : self.OFFSET + REGION] == bytes(
            REGION - 3 * 8 - 1
        )
        assert blank_firmware[self.OFFSET + REGION] == FILLER

    def test_shorter_program_scrubs_longer(self, blank_firmware: bytearray) -> None:
        """Re-encoding a shorter program should leave no stale bytes."""
        long_program = Program(
            steps=tuple(
                ProgramStep(modifier=0x01, delay_ms=9, keys=(4, 5, 6, 7, 8, 9))
                for _ in range(50)
            )
        )
        short_program = Program(steps=(ProgramStep(delay_ms=10, keys=(0x04,)),))

        encode_program(blank_firmware, long_program, self.OFFSET)
        encode_program(blank_firmware, short_program, self.OFFSET)

        fresh = bytearray([FILLER]) * len(blank_firmware)
        encode_program(fresh, short_program, self.OFFSET)
        assert blank_firmware == fresh

    def test_longest_program_fills_region(self, blank_firmware: bytearray) -> None:
        """99 steps should put the terminator in the region's last slot."""
        program = Program(steps=tuple(ProgramStep(keys=(0x04,)) for _ in range(99)))
        encode_program(blank_firmware, program, self.OFFSET)

        last_slot = self.OFFSET + REGION - 8
        assert blank_firmware[last_slot] == 0xFD
        assert blank_firmware[last_slot + 1 : self.OFFSET + REGION] == bytes(7)
        assert blank_firmware[self.OFFSET + REGION] == FILLER
