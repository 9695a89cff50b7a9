"""Firmware layout tables.

A layout describes where a device model keeps its button assignments and
program regions inside the firmware image. Supporting another model means
adding another DeviceLayout, not changing the encoder.
"""

from dataclasses import dataclass

from falcon8.constants import (
    BUTTON_OFFSETS,
    KEYS_PER_STEP,
    NO_KEY,
    PROGRAM_OFFSETS,
    PROGRAM_REGION_SIZE,
    PROGRAM_SENTINELS,
    PROGRAM_SLOT_SIZE,
    STOP_SENTINEL,
)


@dataclass(frozen=True, slots=True)
class ButtonLayout:
    """Firmware locations belonging to one physical button."""

    number: int
    offset: int
    program_sentinel: int
    program_offset: int


@dataclass(frozen=True, slots=True)
class DeviceLayout:
    """Static per-model description of the firmware image."""

    name: str
    buttons: tuple[ButtonLayout, ...]
    program_region_size: int
    slot_size: int
    keys_per_step: int
    stop_sentinel: int
    no_key: int

    @property
    def slots_per_program(self) -> int:
        """Number of slots in one program region, terminator included."""
        return self.program_region_size // self.slot_size

    @property
    def max_program_steps(self) -> int:
        """Largest number of steps that still leaves room for the terminator."""
        return self.slots_per_program - 1

    @property
    def program_sentinels(self) -> frozenset[int]:
        """All keycodes reserved to mark a button as running a program."""
        return frozenset(button.program_sentinel for button in self.buttons)

    @property
    def required_size(self) -> int:
        """Minimum firmware image size that covers every referenced byte."""
        last_button = max(button.offset for button in self.buttons) + 1
        last_program = (
            max(button.program_offset for button in self.buttons)
            + self.program_region_size
        )
        return max(last_button, last_program)

    def button(self, number: int) -> ButtonLayout:
        """Return the layout entry for button *number* (1-based).

        Raises:
            KeyError: If the layout has no such button.
        """
        for button in self.buttons:
            if button.number == number:
                return button
        raise KeyError(number)


FALCON8_LAYOUT = DeviceLayout(
    name="Max Falcon-8",
    buttons=tuple(
        ButtonLayout(
            number=i + 1,
            offset=offset,
            program_sentinel=sentinel,
            program_offset=program_offset,
        )
        for i, (offset, sentinel, program_offset) in enumerate(
            zip(BUTTON_OFFSETS, PROGRAM_SENTINELS, PROGRAM_OFFSETS, strict=True)
        )
    ),
    program_region_size=PROGRAM_REGION_SIZE,
    slot_size=PROGRAM_SLOT_SIZE,
    keys_per_step=KEYS_PER_STEP,
    stop_sentinel=STOP_SENTINEL,
    no_key=NO_KEY,
)
