"""Custom exceptions for falcon8."""


class Falcon8Error(Exception):
    """Base exception for falcon8 errors."""


class BindingError(Falcon8Error):
    """Raised when a button binding breaks a validation rule.

    Attributes:
        button: Button number (1..8) the binding belongs to.
        rule: Short identifier of the violated rule.
    """

    rule = "invalid-binding"

    def __init__(self, button: int, detail: str) -> None:
        self.button = button
        self.detail = detail
        super().__init__(f"button {button}: {detail}")


class MalformedBindingError(BindingError):
    """Raised when a binding sets zero or several of key/character/program."""

    rule = "malformed-binding"


class UnsupportedCharacterError(BindingError):
    """Raised when a character has no keycode."""

    rule = "unsupported-character"


class InvalidCharacterCountError(BindingError):
    """Raised when a character binding is not exactly one character long."""

    rule = "invalid-character-count"


class ReservedKeyError(BindingError):
    """Raised when a direct key is the no-key value or a program sentinel."""

    rule = "reserved-key"


class ValueOutOfRangeError(BindingError):
    """Raised when a modifier, delay or keycode does not fit in one byte."""

    rule = "value-out-of-range"


class ReservedModifierError(BindingError):
    """Raised when a program step modifier equals the stop marker."""

    rule = "reserved-modifier"


class EmptyProgramError(BindingError):
    """Raised when a program has no steps."""

    rule = "empty-program"


class TooManyKeysInStepError(BindingError):
    """Raised when a program step presses more than 6 keys."""

    rule = "too-many-keys-in-step"


class ProgramTooLongError(BindingError):
    """Raised when a program does not fit in its firmware region."""

    rule = "program-too-long"


class BindingsFileError(Falcon8Error):
    """Raised when a bindings description cannot be read or parsed."""


class FirmwareError(Falcon8Error):
    """Raised when the firmware image cannot be read, checked or written."""


class FirmwareSizeError(FirmwareError):
    """Raised when the firmware image is too small for the device layout."""


class FirmwareNotFoundError(FirmwareError):
    """Raised when no mounted keypad volume holds a firmware image."""

    def __init__(
        self,
        message: str = (
            "No mounted Falcon-8 firmware image found. "
            "Connect the keypad in programming mode or pass --firmware."
        ),
    ) -> None:
        super().__init__(message)


class FirmwareAmbiguousError(FirmwareError):
    """Raised when several mounted volumes hold a firmware image."""


class EncoderInvariantError(RuntimeError):
    """Raised when the encoder reaches a state validation should have prevented.

    This is a programming error, not an input error, and is intentionally
    not a Falcon8Error.
    """
