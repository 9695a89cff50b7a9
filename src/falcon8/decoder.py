"""Read button bindings back out of a firmware image."""

import logging

from falcon8.layout import FALCON8_LAYOUT, ButtonLayout, DeviceLayout
from falcon8.models import ButtonBinding, ButtonBindings, Program, ProgramStep

logger = logging.getLogger(__name__)


def decode_program(
    buffer: bytes | bytearray,
    offset: int,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> Program:
    """Decode the program region starting at *offset*.

    Reading stops at the first slot starting with the stop sentinel, or at
    the end of the region if there is none.
    """
    steps: list[ProgramStep] = []
    for index in range(layout.slots_per_program):
        start = offset + index * layout.slot_size
        if buffer[start] == layout.stop_sentinel:
            break

        keys = list(buffer[start + 2 : start + 2 + layout.keys_per_step])
        while keys and keys[-1] == layout.no_key:
            keys.pop()

        steps.append(
            ProgramStep(
                modifier=buffer[start],
                delay_ms=buffer[start + 1],
                keys=tuple(keys),
            )
        )
    else:
        logger.warning("No stop marker in program region at 0x%x", offset)

    return Program(steps=tuple(steps))


def decode_binding(
    buffer: bytes | bytearray,
    button: ButtonLayout,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> ButtonBinding:
    """Decode the binding stored for one button."""
    keycode = buffer[button.offset]
    if keycode == button.program_sentinel:
        return ButtonBinding(
            program=decode_program(buffer, button.program_offset, layout)
        )
    return ButtonBinding.for_key(keycode)


def decode_firmware(
    buffer: bytes | bytearray,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> ButtonBindings:
    """Decode all button bindings from a firmware image.

    Character bindings cannot be told apart from key bindings once written,
    so every non-program button comes back as a key binding.
    """
    return ButtonBindings(
        buttons=tuple(
            decode_binding(buffer, button, layout) for button in layout.buttons
        )
    )
