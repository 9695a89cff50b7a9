"""Data models for falcon8 button bindings."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from falcon8.constants import BUTTON_COUNT


class BindingKind(Enum):
    """The three mutually exclusive actions a button can have."""

    KEY = "key"
    CHARACTER = "character"
    PROGRAM = "program"


@dataclass(frozen=True, slots=True)
class ProgramStep:
    """One timed step of a program.

    The keys are pressed together while the modifier bits are held, then
    the keypad waits delay_ms before the next step.
    """

    modifier: int = 0
    delay_ms: int = 0
    keys: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class Program:
    """An ordered macro assigned to a button."""

    steps: tuple[ProgramStep, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProgramStep]:
        return iter(self.steps)


@dataclass(frozen=True, slots=True)
class ButtonBinding:
    """The action assigned to one physical button.

    Exactly one of key, character or program is expected to be set. The
    model can hold any combination so that the validator can report the
    bad ones instead of the loader silently picking one.
    """

    key: int | None = None
    character: str | None = None
    program: Program | None = None

    @classmethod
    def for_key(cls, keycode: int) -> "ButtonBinding":
        """Bind a button to a single keycode."""
        return cls(key=keycode)

    @classmethod
    def for_character(cls, character: str) -> "ButtonBinding":
        """Bind a button to the key that types *character*."""
        return cls(character=character)

    @classmethod
    def for_program(cls, *steps: ProgramStep) -> "ButtonBinding":
        """Bind a button to a program made of *steps*."""
        return cls(program=Program(steps=tuple(steps)))

    @property
    def kinds(self) -> tuple[BindingKind, ...]:
        """Every variant that is populated on this binding."""
        populated = []
        if self.key is not None:
            populated.append(BindingKind.KEY)
        if self.character is not None:
            populated.append(BindingKind.CHARACTER)
        if self.program is not None:
            populated.append(BindingKind.PROGRAM)
        return tuple(populated)

    @property
    def kind(self) -> BindingKind | None:
        """The binding's variant, or None unless exactly one is populated."""
        kinds = self.kinds
        if len(kinds) != 1:
            return None
        return kinds[0]


@dataclass(frozen=True, slots=True)
class ButtonBindings:
    """Bindings for all 8 buttons, in physical order 1..8."""

    buttons: tuple[ButtonBinding, ...] = field(
        default_factory=lambda: tuple(ButtonBinding() for _ in range(BUTTON_COUNT))
    )

    def __post_init__(self) -> None:
        if len(self.buttons) != BUTTON_COUNT:
            msg = f"Expected {BUTTON_COUNT} button bindings, got {len(self.buttons)}"
            raise ValueError(msg)

    def __iter__(self) -> Iterator[tuple[int, ButtonBinding]]:
        """Yield (button number, binding) pairs starting at button 1."""
        return iter(enumerate(self.buttons, start=1))

    def button(self, number: int) -> ButtonBinding:
        """Return the binding for button *number* (1-based)."""
        if not 1 <= number <= BUTTON_COUNT:
            msg = f"Button number must be 1..{BUTTON_COUNT}, got {number}"
            raise IndexError(msg)
        return self.buttons[number - 1]

    def replace(self, number: int, binding: ButtonBinding) -> "ButtonBindings":
        """Return a copy with button *number* bound to *binding*."""
        self.button(number)
        buttons = list(self.buttons)
        buttons[number - 1] = binding
        return ButtonBindings(buttons=tuple(buttons))
