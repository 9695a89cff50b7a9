"""falcon8 - Program the buttons of a Max Falcon-8 macro keypad.

The keypad keeps its button assignments in a firmware image exposed on a
USB drive. This package validates a bindings description and writes it
into that image at the device's fixed offsets.

Example:
    from falcon8 import (
        check_firmware_size,
        encode_firmware,
        load_bindings,
        read_firmware,
        validate_bindings,
        write_firmware,
    )

    bindings = load_bindings("bindings.yaml")
    validate_bindings(bindings)
    image = read_firmware("/media/FALCON/firmware.bin")
    check_firmware_size(image)
    encode_firmware(image, bindings)
    write_firmware("/media/FALCON/firmware.bin", image)
"""

from falcon8.config import dump_bindings, load_bindings, parse_bindings
from falcon8.decoder import decode_firmware
from falcon8.encoder import encode_firmware
from falcon8.exceptions import (
    BindingError,
    BindingsFileError,
    EmptyProgramError,
    EncoderInvariantError,
    Falcon8Error,
    FirmwareError,
    FirmwareSizeError,
    InvalidCharacterCountError,
    MalformedBindingError,
    ProgramTooLongError,
    ReservedKeyError,
    ReservedModifierError,
    TooManyKeysInStepError,
    UnsupportedCharacterError,
    ValueOutOfRangeError,
)
from falcon8.firmware import check_firmware_size, read_firmware, write_firmware
from falcon8.keycodes import char_to_keycode
from falcon8.layout import FALCON8_LAYOUT, ButtonLayout, DeviceLayout
from falcon8.models import (
    BindingKind,
    ButtonBinding,
    ButtonBindings,
    Program,
    ProgramStep,
)
from falcon8.validation import find_binding_errors, validate_bindings

__version__ = "2.1.0"

__all__ = [
    "FALCON8_LAYOUT",
    "BindingError",
    "BindingKind",
    "BindingsFileError",
    "ButtonBinding",
    "ButtonBindings",
    "ButtonLayout",
    "DeviceLayout",
    "EmptyProgramError",
    "EncoderInvariantError",
    "Falcon8Error",
    "FirmwareError",
    "FirmwareSizeError",
    "InvalidCharacterCountError",
    "MalformedBindingError",
    "Program",
    "ProgramStep",
    "ProgramTooLongError",
    "ReservedKeyError",
    "ReservedModifierError",
    "TooManyKeysInStepError",
    "UnsupportedCharacterError",
    "ValueOutOfRangeError",
    "__version__",
    "char_to_keycode",
    "check_firmware_size",
    "decode_firmware",
    "dump_bindings",
    "encode_firmware",
    "find_binding_errors",
    "load_bindings",
    "parse_bindings",
    "read_firmware",
    "validate_bindings",
    "write_firmware",
]
