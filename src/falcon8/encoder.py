"""Firmware encoder.

Writes validated button bindings into an in-memory firmware image. The
image must be fully loaded before encoding and written back in a single
write afterwards: the keypad corrupts its firmware when the file on its
volume is patched with interleaved seek/write calls.
"""

import logging

from falcon8.exceptions import EncoderInvariantError
from falcon8.keycodes import char_to_keycode
from falcon8.layout import FALCON8_LAYOUT, ButtonLayout, DeviceLayout
from falcon8.models import BindingKind, ButtonBinding, ButtonBindings, Program

logger = logging.getLogger(__name__)


def _write_byte(buffer: bytearray, value: int, offset: int) -> None:
    # No bounds check; the buffer size is checked once against the layout.
    logger.debug("    write byte=0x%02x offset=0x%x", value, offset)
    buffer[offset] = value


def encode_program(
    buffer: bytearray,
    program: Program,
    offset: int,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Serialize *program* into the program region starting at *offset*.

    Each step takes one slot: modifier, delay, then the step's keys
    right-padded with the no-key value. The slot after the last step starts
    with the stop sentinel, and the rest of the region is zeroed so no
    stale steps from an earlier, longer program survive.
    """
    logger.debug("Encoding %d program steps at offset=0x%x", len(program), offset)

    for index, step in enumerate(program.steps):
        start = offset + index * layout.slot_size
        logger.debug("  Step %d at offset=0x%x", index, start)
        _write_byte(buffer, step.modifier & 0xFF, start)
        _write_byte(buffer, step.delay_ms & 0xFF, start + 1)

        for position in range(layout.keys_per_step):
            keycode = layout.no_key
            if position < len(step.keys):
                keycode = step.keys[position]
            _write_byte(buffer, keycode, start + 2 + position)

    stop_at = offset + len(program.steps) * layout.slot_size
    logger.debug("  Stop slot at offset=0x%x", stop_at)
    _write_byte(buffer, layout.stop_sentinel, stop_at)

    region_end = offset + layout.program_region_size
    logger.debug("  Zero fill 0x%x..0x%x", stop_at + 1, region_end)
    buffer[stop_at + 1 : region_end] = bytes(region_end - stop_at - 1)


def encode_binding(
    buffer: bytearray,
    binding: ButtonBinding,
    button: ButtonLayout,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Write one button's binding into *buffer*.

    Raises:
        EncoderInvariantError: If the binding did not pass validation.
    """
    kind = binding.kind
    logger.debug(
        "Button %d (%s) at offset=0x%x",
        button.number,
        kind.value if kind else "unset",
        button.offset,
    )

    if kind is BindingKind.KEY and binding.key is not None:
        _write_byte(buffer, binding.key, button.offset)
    elif kind is BindingKind.CHARACTER and binding.character is not None:
        keycode = char_to_keycode(binding.character)
        if keycode is None:
            msg = f"unresolvable character reached the encoder: {binding!r}"
            raise EncoderInvariantError(msg)
        _write_byte(buffer, keycode, button.offset)
    elif kind is BindingKind.PROGRAM and binding.program is not None:
        _write_byte(buffer, button.program_sentinel, button.offset)
        encode_program(buffer, binding.program, button.program_offset, layout)
    else:
        msg = f"invalid binding state for button {button.number}: {binding!r}"
        raise EncoderInvariantError(msg)


def encode_firmware(
    buffer: bytearray,
    bindings: ButtonBindings,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Write all 8 validated bindings into *buffer* in place.

    Args:
        buffer: The complete firmware image. Must already be checked with
            check_firmware_size() against the same layout.
        bindings: Bindings that passed validate_bindings().
        layout: Device layout giving every offset written.

    Raises:
        EncoderInvariantError: If an unvalidated binding is encountered.
    """
    for button, (_, binding) in zip(layout.buttons, bindings, strict=True):
        encode_binding(buffer, binding, button, layout)
