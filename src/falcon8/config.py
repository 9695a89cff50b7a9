"""Loading and saving the human-readable bindings description.

Bindings files are YAML (or JSON, picked by file suffix)::

    buttons:
      1: {key: KEY_A}
      2: {character: "b"}
      3:
        program:
          - {modifier: [LEFT_CTRL], delay_ms: 10, keys: [KEY_C]}
          - {delay_ms: 10, keys: [KEY_V]}
      ...

All 8 buttons must be listed. Whether each binding is well formed is left
to the validator; this module only turns text into models.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from falcon8.constants import BUTTON_COUNT
from falcon8.exceptions import BindingsFileError
from falcon8.keycodes import (
    KEYCODE_NAMES,
    MODIFIER_BITS,
    key_name_to_keycode,
    keycode_name,
    modifier_names,
)
from falcon8.models import ButtonBinding, ButtonBindings, Program, ProgramStep

logger = logging.getLogger(__name__)

BINDING_FIELDS = frozenset({"key", "character", "program"})
STEP_FIELDS = frozenset({"modifier", "delay_ms", "keys"})
JSON_SUFFIXES = frozenset({".json"})

TEMPLATE = """\
# Max Falcon-8 button bindings.
#
# Buttons, looking at the top of the keypad:
#
#   | 1 | 2 | 3 | 4 |
#   | 5 | 6 | 7 | 8 |
#
# Each button takes exactly one of:
#   key:       a key name (see 'falcon8 keys') or a keycode number
#   character: one unshifted printable character
#   program:   a list of steps, each with optional modifier, delay_ms and
#              up to 6 keys pressed together
buttons:
  1: {key: KEY_F13}
  2: {key: KEY_F14}
  3: {key: KEY_F15}
  4: {key: KEY_F16}
  5: {character: "a"}
  6: {character: "b"}
  7:
    program:
      - {modifier: [LEFT_CTRL], delay_ms: 10, keys: [KEY_C]}
  8:
    program:
      - {modifier: [LEFT_CTRL], delay_ms: 10, keys: [KEY_V]}
"""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_keycode(button: int, value: Any) -> int:
    if _is_int(value):
        return int(value)
    if isinstance(value, str):
        keycode = key_name_to_keycode(value)
        if keycode is not None:
            return keycode
        msg = f"button {button}: unknown key name {value!r}"
        raise BindingsFileError(msg)
    msg = f"button {button}: key must be a name or a number, got {value!r}"
    raise BindingsFileError(msg)


def _parse_modifier(button: int, value: Any) -> int:
    if value is None:
        return 0
    if _is_int(value):
        return int(value)

    names = [value] if isinstance(value, str) else value
    if not isinstance(names, list):
        msg = f"button {button}: modifier must be a number or list of names"
        raise BindingsFileError(msg)

    mask = 0
    for name in names:
        bit = MODIFIER_BITS.get(str(name).strip().upper())
        if bit is None:
            msg = f"button {button}: unknown modifier {name!r}"
            raise BindingsFileError(msg)
        mask |= bit
    return mask


def _parse_step(button: int, raw: Any) -> ProgramStep:
    if not isinstance(raw, dict):
        msg = f"button {button}: program steps must be mappings, got {raw!r}"
        raise BindingsFileError(msg)

    unknown = set(raw) - STEP_FIELDS
    if unknown:
        msg = f"button {button}: unknown program step fields {sorted(unknown)}"
        raise BindingsFileError(msg)

    delay = raw.get("delay_ms", 0)
    if delay is None:
        delay = 0
    if not _is_int(delay):
        msg = f"button {button}: delay_ms must be a number, got {delay!r}"
        raise BindingsFileError(msg)

    keys = raw.get("keys")
    if keys is None:
        keys = []
    if not isinstance(keys, list):
        msg = f"button {button}: keys must be a list, got {keys!r}"
        raise BindingsFileError(msg)

    return ProgramStep(
        modifier=_parse_modifier(button, raw.get("modifier")),
        delay_ms=int(delay),
        keys=tuple(_parse_keycode(button, key) for key in keys),
    )


def _parse_binding(button: int, raw: Any) -> ButtonBinding:
    if raw is None:
        return ButtonBinding()
    if not isinstance(raw, dict):
        msg = f"button {button}: binding must be a mapping, got {raw!r}"
        raise BindingsFileError(msg)

    unknown = set(raw) - BINDING_FIELDS
    if unknown:
        msg = f"button {button}: unknown binding fields {sorted(unknown)}"
        raise BindingsFileError(msg)

    key = raw.get("key")
    character = raw.get("character")
    program = raw.get("program")

    if character is not None and not isinstance(character, str):
        # YAML reads `character: 1` as a number
        if _is_int(character):
            character = str(character)
        else:
            msg = f"button {button}: character must be a string, got {character!r}"
            raise BindingsFileError(msg)

    if program is not None and not isinstance(program, list):
        msg = f"button {button}: program must be a list of steps"
        raise BindingsFileError(msg)

    return ButtonBinding(
        key=None if key is None else _parse_keycode(button, key),
        character=character,
        program=(
            None
            if program is None
            else Program(steps=tuple(_parse_step(button, step) for step in program))
        ),
    )


def parse_bindings(raw: Any) -> ButtonBindings:
    """Build ButtonBindings from an already-deserialized document.

    Raises:
        BindingsFileError: If the document does not have the expected shape.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("buttons"), dict):
        msg = "bindings must be a mapping with a 'buttons' mapping"
        raise BindingsFileError(msg)

    by_number: dict[int, Any] = {}
    for number, binding in raw["buttons"].items():
        if _is_int(number):
            index = int(number)
        elif isinstance(number, str) and number.isascii() and number.isdigit():
            index = int(number)
        else:
            msg = f"invalid button number {number!r}"
            raise BindingsFileError(msg)
        if not 1 <= index <= BUTTON_COUNT:
            msg = f"button number {index} is outside 1..{BUTTON_COUNT}"
            raise BindingsFileError(msg)
        if index in by_number:
            msg = f"button {index} is listed more than once"
            raise BindingsFileError(msg)
        by_number[index] = binding

    missing = [n for n in range(1, BUTTON_COUNT + 1) if n not in by_number]
    if missing:
        msg = f"missing bindings for buttons {missing}"
        raise BindingsFileError(msg)

    return ButtonBindings(
        buttons=tuple(
            _parse_binding(n, by_number[n]) for n in range(1, BUTTON_COUNT + 1)
        )
    )


def load_bindings(path: str | Path) -> ButtonBindings:
    """Load a bindings description from a YAML or JSON file.

    Raises:
        BindingsFileError: If the file cannot be read or parsed.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            if p.suffix.lower() in JSON_SUFFIXES:
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except OSError as e:
        msg = f"Cannot read bindings file {p}: {e}"
        raise BindingsFileError(msg) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        msg = f"Cannot parse bindings file {p}: {e}"
        raise BindingsFileError(msg) from e

    logger.debug("Loaded bindings document from %s: %r", p, raw)
    return parse_bindings(raw)


def _key_to_raw(keycode: int) -> str | int:
    if keycode in KEYCODE_NAMES:
        return keycode_name(keycode)
    return keycode


def _modifier_to_raw(modifier: int) -> list[str] | int:
    if 0 <= modifier <= 0xFF:
        return modifier_names(modifier)
    return modifier


def _binding_to_raw(binding: ButtonBinding) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    if binding.key is not None:
        raw["key"] = _key_to_raw(binding.key)
    if binding.character is not None:
        raw["character"] = binding.character
    if binding.program is not None:
        raw["program"] = [
            {
                "modifier": _modifier_to_raw(step.modifier),
                "delay_ms": step.delay_ms,
                "keys": [_key_to_raw(key) for key in step.keys],
            }
            for step in binding.program.steps
        ]
    return raw


def bindings_to_dict(bindings: ButtonBindings) -> dict[str, Any]:
    """Convert bindings to the plain document form used in bindings files."""
    return {
        "buttons": {number: _binding_to_raw(binding) for number, binding in bindings}
    }


def dump_bindings(bindings: ButtonBindings) -> str:
    """Render bindings as YAML text that load_bindings() reads back."""
    return yaml.safe_dump(bindings_to_dict(bindings), sort_keys=False)


def save_bindings(path: str | Path, bindings: ButtonBindings) -> None:
    """Write bindings to *path* as JSON or YAML depending on its suffix."""
    p = Path(path)
    if p.suffix.lower() in JSON_SUFFIXES:
        text = json.dumps(bindings_to_dict(bindings), indent=2) + "\n"
    else:
        text = dump_bindings(bindings)
    p.write_text(text, encoding="utf-8")


def write_template(path: str | Path) -> None:
    """Write an example bindings file to *path*.

    Raises:
        BindingsFileError: If *path* already exists.
    """
    p = Path(path)
    if p.exists():
        msg = f"Refusing to overwrite existing file {p}"
        raise BindingsFileError(msg)
    p.write_text(TEMPLATE, encoding="utf-8")
