"""HID keyboard keycodes understood by the Falcon-8 firmware.

Values are USB HID usage IDs from the Keyboard/Keypad page (0x07), which is
what the keypad stores for each button and in each program step.
"""

from typing import Final

# Modifier bitmask used in the first byte of a program step
MODIFIER_BITS: Final[dict[str, int]] = {
    "LEFT_CTRL": 0x01,
    "LEFT_SHIFT": 0x02,
    "LEFT_ALT": 0x04,
    "LEFT_META": 0x08,
    "RIGHT_CTRL": 0x10,
    "RIGHT_SHIFT": 0x20,
    "RIGHT_ALT": 0x40,
    "RIGHT_META": 0x80,
}


def _build_key_names() -> dict[str, int]:
    names: dict[str, int] = {}

    for i, letter in enumerate("ABCDEFGHIJKLMNOPQRSTUVWXYZ"):
        names[letter] = 0x04 + i

    # HID orders digits 1..9 then 0
    for i, digit in enumerate("1234567890"):
        names[digit] = 0x1E + i

    names.update(
        {
            "ENTER": 0x28,
            "ESCAPE": 0x29,
            "BACKSPACE": 0x2A,
            "TAB": 0x2B,
            "SPACE": 0x2C,
            "MINUS": 0x2D,
            "EQUAL": 0x2E,
            "LEFT_BRACE": 0x2F,
            "RIGHT_BRACE": 0x30,
            "BACKSLASH": 0x31,
            "SEMICOLON": 0x33,
            "APOSTROPHE": 0x34,
            "GRAVE": 0x35,
            "COMMA": 0x36,
            "DOT": 0x37,
            "SLASH": 0x38,
            "CAPS_LOCK": 0x39,
        }
    )

    for i in range(12):
        names[f"F{i + 1}"] = 0x3A + i

    names.update(
        {
            "PRINT_SCREEN": 0x46,
            "SCROLL_LOCK": 0x47,
            "PAUSE": 0x48,
            "INSERT": 0x49,
            "HOME": 0x4A,
            "PAGE_UP": 0x4B,
            "DELETE": 0x4C,
            "END": 0x4D,
            "PAGE_DOWN": 0x4E,
            "RIGHT": 0x4F,
            "LEFT": 0x50,
            "DOWN": 0x51,
            "UP": 0x52,
            "NUM_LOCK": 0x53,
            "KP_SLASH": 0x54,
            "KP_ASTERISK": 0x55,
            "KP_MINUS": 0x56,
            "KP_PLUS": 0x57,
            "KP_ENTER": 0x58,
        }
    )

    for i, digit in enumerate("1234567890"):
        names[f"KP_{digit}"] = 0x59 + i

    names.update({"KP_DOT": 0x63, "COMPOSE": 0x65})

    for i in range(12):
        names[f"F{i + 13}"] = 0x68 + i

    names.update(
        {
            "MUTE": 0x7F,
            "VOLUME_UP": 0x80,
            "VOLUME_DOWN": 0x81,
            "LEFT_CTRL": 0xE0,
            "LEFT_SHIFT": 0xE1,
            "LEFT_ALT": 0xE2,
            "LEFT_META": 0xE3,
            "RIGHT_CTRL": 0xE4,
            "RIGHT_SHIFT": 0xE5,
            "RIGHT_ALT": 0xE6,
            "RIGHT_META": 0xE7,
        }
    )
    return names


# Key name (without the KEY_ prefix) -> keycode
KEY_NAMES: Final[dict[str, int]] = _build_key_names()

# Keycode -> canonical key name
KEYCODE_NAMES: Final[dict[int, str]] = {code: name for name, code in KEY_NAMES.items()}

# Printable characters that map to a single unshifted key
CHARACTER_KEYCODES: Final[dict[str, int]] = {
    **{c: KEY_NAMES[c.upper()] for c in "abcdefghijklmnopqrstuvwxyz0123456789"},
    " ": KEY_NAMES["SPACE"],
    "-": KEY_NAMES["MINUS"],
    "=": KEY_NAMES["EQUAL"],
    "[": KEY_NAMES["LEFT_BRACE"],
    "]": KEY_NAMES["RIGHT_BRACE"],
    "\\": KEY_NAMES["BACKSLASH"],
    ";": KEY_NAMES["SEMICOLON"],
    "'": KEY_NAMES["APOSTROPHE"],
    "`": KEY_NAMES["GRAVE"],
    ",": KEY_NAMES["COMMA"],
    ".": KEY_NAMES["DOT"],
    "/": KEY_NAMES["SLASH"],
}


def char_to_keycode(char: str) -> int | None:
    """Resolve a printable character to its keycode.

    Only characters typed without a modifier are supported, so uppercase
    letters and shifted symbols resolve to None.

    Args:
        char: A single character.

    Returns:
        The keycode, or None if the character is not supported.
    """
    return CHARACTER_KEYCODES.get(char)


def key_name_to_keycode(name: str) -> int | None:
    """Resolve a key name such as ``KEY_A`` or ``page_up`` to its keycode."""
    normalized = name.strip().upper()
    normalized = normalized.removeprefix("KEY_")
    return KEY_NAMES.get(normalized)


def keycode_name(code: int) -> str:
    """Return ``KEY_<NAME>`` for a keycode, or a hex literal if unnamed."""
    name = KEYCODE_NAMES.get(code)
    if name is None:
        return f"0x{code:02X}"
    return f"KEY_{name}"


def modifier_names(mask: int) -> list[str]:
    """Split a modifier bitmask into its names, lowest bit first."""
    return [name for name, bit in MODIFIER_BITS.items() if mask & bit]
