"""Button binding validation.

Bindings must pass validation before the encoder touches a firmware image;
the encoder does not re-check anything.
"""

import logging

from falcon8.exceptions import (
    BindingError,
    EmptyProgramError,
    InvalidCharacterCountError,
    MalformedBindingError,
    ProgramTooLongError,
    ReservedKeyError,
    ReservedModifierError,
    TooManyKeysInStepError,
    UnsupportedCharacterError,
    ValueOutOfRangeError,
)
from falcon8.keycodes import char_to_keycode
from falcon8.layout import FALCON8_LAYOUT, DeviceLayout
from falcon8.models import ButtonBinding, ButtonBindings, Program

logger = logging.getLogger(__name__)

BYTE_MAX = 0xFF


def _fits_in_byte(value: int) -> bool:
    return 0 <= value <= BYTE_MAX


def _check_key(button: int, keycode: int, layout: DeviceLayout) -> None:
    if not _fits_in_byte(keycode):
        msg = f"keycode {keycode} does not fit in one byte"
        raise ValueOutOfRangeError(button, msg)
    if keycode == layout.no_key:
        msg = f"keycode 0x{keycode:02X} is the reserved 'no key' value"
        raise ReservedKeyError(button, msg)
    if keycode in layout.program_sentinels:
        msg = f"keycode 0x{keycode:02X} is reserved as a program marker"
        raise ReservedKeyError(button, msg)


def _check_character(button: int, character: str) -> None:
    if len(character) != 1:
        msg = f"character binding must be exactly 1 character, got {character!r}"
        raise InvalidCharacterCountError(button, msg)
    if char_to_keycode(character) is None:
        msg = f"character {character!r} has no keycode"
        raise UnsupportedCharacterError(button, msg)


def _check_program(button: int, program: Program, layout: DeviceLayout) -> None:
    if len(program.steps) == 0:
        raise EmptyProgramError(button, "program has no steps")

    if len(program.steps) > layout.max_program_steps:
        msg = (
            f"program has {len(program.steps)} steps, "
            f"at most {layout.max_program_steps} fit"
        )
        raise ProgramTooLongError(button, msg)

    for index, step in enumerate(program.steps):
        if len(step.keys) > layout.keys_per_step:
            msg = (
                f"step {index} presses {len(step.keys)} keys, "
                f"at most {layout.keys_per_step} allowed"
            )
            raise TooManyKeysInStepError(button, msg)
        if not _fits_in_byte(step.modifier):
            msg = f"step {index} modifier {step.modifier} does not fit in one byte"
            raise ValueOutOfRangeError(button, msg)
        if step.modifier == layout.stop_sentinel:
            msg = (
                f"step {index} modifier 0x{step.modifier:02X} would be read "
                "as the end of the program"
            )
            raise ReservedModifierError(button, msg)
        if not _fits_in_byte(step.delay_ms):
            msg = f"step {index} delay {step.delay_ms}ms is outside 0..255"
            raise ValueOutOfRangeError(button, msg)
        for keycode in step.keys:
            if not _fits_in_byte(keycode):
                msg = f"step {index} keycode {keycode} does not fit in one byte"
                raise ValueOutOfRangeError(button, msg)


def validate_binding(
    button: int,
    binding: ButtonBinding,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Validate a single button's binding.

    Args:
        button: Button number (1..8), used in error reports.
        binding: The binding to check.
        layout: Device layout supplying the reserved values and region size.

    Raises:
        BindingError: The first rule the binding breaks.
    """
    kinds = binding.kinds
    if len(kinds) != 1:
        if kinds:
            populated = ", ".join(kind.value for kind in kinds)
            msg = f"exactly one of key/character/program must be set, got {populated}"
        else:
            msg = "exactly one of key/character/program must be set, got none"
        raise MalformedBindingError(button, msg)

    if binding.key is not None:
        _check_key(button, binding.key, layout)
    elif binding.character is not None:
        _check_character(button, binding.character)
    elif binding.program is not None:
        _check_program(button, binding.program, layout)


def find_binding_errors(
    bindings: ButtonBindings,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> list[BindingError]:
    """Check every button and collect the first error found on each.

    Returns:
        Errors in button order; empty if all bindings are valid.
    """
    errors: list[BindingError] = []
    for number, binding in bindings:
        try:
            validate_binding(number, binding, layout)
        except BindingError as e:
            logger.debug("Button %d rejected (%s): %s", number, e.rule, e.detail)
            errors.append(e)
    return errors


def validate_bindings(
    bindings: ButtonBindings,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Validate all 8 bindings, stopping at the first bad button.

    Raises:
        BindingError: Identifying the button and the rule it breaks.
    """
    for number, binding in bindings:
        validate_binding(number, binding, layout)
    logger.debug("All %d bindings are valid", len(bindings.buttons))
