"""Tests for keycodes module."""

import pytest

from falcon8.constants import PROGRAM_SENTINELS, STOP_SENTINEL
from falcon8.keycodes import (
    CHARACTER_KEYCODES,
    KEY_NAMES,
    char_to_keycode,
    key_name_to_keycode,
    keycode_name,
    modifier_names,
)


class TestCharToKeycode:
    """Tests for char_to_keycode function."""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("a", 0x04),
            ("z", 0x1D),
            ("1", 0x1E),
            ("9", 0x26),
            ("0", 0x27),
            (" ", 0x2C),
            ("-", 0x2D),
            ("/", 0x38),
        ],
    )
    def test_known_characters(self, char: str, expected: int) -> None:
        """Should resolve unshifted characters to HID usage IDs."""
        assert char_to_keycode(char) == expected

    @pytest.mark.parametrize("char", ["A", "!", "@", "é", "\n", "ab", ""])
    def test_unsupported_characters(self, char: str) -> None:
        """Should return None instead of raising for unsupported input."""
        assert char_to_keycode(char) is None

    def test_no_character_maps_to_reserved_value(self) -> None:
        """Resolved keycodes should never be a sentinel."""
        reserved = {0x00, STOP_SENTINEL, *PROGRAM_SENTINELS}
        assert not reserved & set(CHARACTER_KEYCODES.values())


class TestKeyNames:
    """Tests for key name lookups."""

    def test_prefix_and_case_insensitive(self) -> None:
        """KEY_ prefix and case should not matter."""
        assert key_name_to_keycode("KEY_A") == 0x04
        assert key_name_to_keycode("key_a") == 0x04
        assert key_name_to_keycode("a") == 0x04
        assert key_name_to_keycode(" page_up ") == 0x4B

    def test_unknown_name(self) -> None:
        """Unknown names should resolve to None."""
        assert key_name_to_keycode("KEY_NOPE") is None

    def test_function_keys(self) -> None:
        """F1..F24 should all be named."""
        assert KEY_NAMES["F1"] == 0x3A
        assert KEY_NAMES["F12"] == 0x45
        assert KEY_NAMES["F13"] == 0x68
        assert KEY_NAMES["F24"] == 0x73

    def test_keycode_name(self) -> None:
        """Should return KEY_ names and fall back to hex."""
        assert keycode_name(0x28) == "KEY_ENTER"
        assert keycode_name(0xF0) == "0xF0"

    def test_names_are_unique_per_code(self) -> None:
        """Each keycode should have exactly one name."""
        assert len(set(KEY_NAMES.values())) == len(KEY_NAMES)


class TestModifierNames:
    """Tests for modifier_names function."""

    def test_split_mask(self) -> None:
        """Should list every set bit."""
        assert modifier_names(0x03) == ["LEFT_CTRL", "LEFT_SHIFT"]
        assert modifier_names(0x00) == []
        assert len(modifier_names(0xFF)) == 8
