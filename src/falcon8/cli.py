"""Command-line interface for falcon8."""

import argparse
import logging
import sys
from pathlib import Path

from falcon8 import __version__
from falcon8.config import dump_bindings, load_bindings, write_template
from falcon8.decoder import decode_firmware
from falcon8.encoder import encode_firmware
from falcon8.exceptions import (
    BindingsFileError,
    Falcon8Error,
    FirmwareError,
)
from falcon8.firmware import check_firmware_size, read_firmware, write_firmware
from falcon8.keycodes import CHARACTER_KEYCODES, KEY_NAMES, MODIFIER_BITS
from falcon8.layout import FALCON8_LAYOUT
from falcon8.locate import locate_firmware
from falcon8.models import ButtonBindings
from falcon8.validation import find_binding_errors

# Epilog text for main parser
MAIN_EPILOG = """\
examples:
  falcon8 template bindings.yaml        Write an example bindings file
  falcon8 verify bindings.yaml          Check a bindings file
  falcon8 program bindings.yaml         Program the connected keypad
  falcon8 show                          Print the keypad's current bindings
  falcon8 keys                          List key, character and modifier names

Put the keypad in programming mode first so its drive is mounted.
Use -h with any command for detailed help.
"""

PROGRAM_EPILOG = """\
examples:
  falcon8 program bindings.yaml
  falcon8 program bindings.yaml --firmware /media/FALCON/firmware.bin
  falcon8 program bindings.yaml --dry-run

note:
  The firmware image is read once, changed in memory and written back with
  a single write. Nothing is written if any binding is invalid.
"""


def _load_valid_bindings(path: Path) -> ButtonBindings | None:
    """Load bindings and report every invalid button.

    Returns:
        The bindings, or None if any button is invalid.
    """
    bindings = load_bindings(path)
    errors = find_binding_errors(bindings, FALCON8_LAYOUT)
    for error in errors:
        print(f"Error: {error} [{error.rule}]", file=sys.stderr)
    if errors:
        return None
    return bindings


def _resolve_firmware(path: Path | None) -> Path:
    if path is not None:
        return path
    found = locate_firmware()
    print(f"Using firmware image {found}")
    return found


def cmd_verify(args: argparse.Namespace) -> int:
    """Validate a bindings file without touching any firmware."""
    try:
        if _load_valid_bindings(args.bindings) is None:
            return 1
    except BindingsFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{args.bindings}: all {len(FALCON8_LAYOUT.buttons)} bindings are valid")
    return 0


def cmd_program(args: argparse.Namespace) -> int:
    """Write a bindings file into the keypad's firmware image."""
    try:
        bindings = _load_valid_bindings(args.bindings)
        if bindings is None:
            return 1

        firmware_path = _resolve_firmware(args.firmware)
        buffer = read_firmware(firmware_path)
        check_firmware_size(buffer, FALCON8_LAYOUT)

        encode_firmware(buffer, bindings, FALCON8_LAYOUT)

        if args.dry_run:
            print(f"Dry run: {len(buffer)} bytes encoded, nothing written")
            return 0

        written = write_firmware(firmware_path, buffer)
        print(f"Bytes written: {written}")
        return 0

    except Falcon8Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Print the bindings currently stored in a firmware image."""
    try:
        firmware_path = _resolve_firmware(args.firmware)
        buffer = read_firmware(firmware_path)
        check_firmware_size(buffer, FALCON8_LAYOUT)
    except FirmwareError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(dump_bindings(decode_firmware(buffer, FALCON8_LAYOUT)), end="")
    return 0


def cmd_template(args: argparse.Namespace) -> int:
    """Write an example bindings file."""
    try:
        write_template(args.path)
    except BindingsFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot write {args.path}: {e}", file=sys.stderr)
        return 1

    print(f"Wrote example bindings to {args.path}")
    return 0


def cmd_keys(args: argparse.Namespace) -> int:
    """List the names accepted in bindings files."""
    print("keys:")
    for name, code in sorted(KEY_NAMES.items(), key=lambda item: item[1]):
        print(f"  0x{code:02X}  KEY_{name}")

    print("characters:")
    print("  " + " ".join(repr(c) for c in CHARACTER_KEYCODES))

    print("modifiers:")
    for name, bit in MODIFIER_BITS.items():
        print(f"  0x{bit:02X}  {name}")
    return 0


def main() -> int:
    """Main entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="falcon8",
        description="Program the buttons of a Max Falcon-8 macro keypad.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log every byte written to the firmware image",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="commands",
        metavar="<command>",
    )

    # verify subcommand
    verify_parser = subparsers.add_parser(
        "verify",
        help="check a bindings file without writing firmware",
        description="Load a bindings file and report every invalid button.",
    )
    verify_parser.add_argument("bindings", type=Path, metavar="FILE")
    verify_parser.set_defaults(func=cmd_verify)

    # program subcommand
    program_parser = subparsers.add_parser(
        "program",
        help="write a bindings file into the keypad firmware",
        description=(
            "Validate a bindings file and write it into the firmware image.\n"
            "The image is found on mounted drives unless --firmware is given."
        ),
        epilog=PROGRAM_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    program_parser.add_argument("bindings", type=Path, metavar="FILE")
    program_parser.add_argument(
        "--firmware",
        type=Path,
        metavar="PATH",
        default=None,
        help="firmware image to modify in place (default: auto-detect)",
    )
    program_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="encode the bindings but do not write the image",
    )
    program_parser.set_defaults(func=cmd_program)

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="print the bindings stored in the keypad firmware",
        description="Decode a firmware image and print its bindings as YAML.",
    )
    show_parser.add_argument(
        "--firmware",
        type=Path,
        metavar="PATH",
        default=None,
        help="firmware image to read (default: auto-detect)",
    )
    show_parser.set_defaults(func=cmd_show)

    # template subcommand
    template_parser = subparsers.add_parser(
        "template",
        help="write an example bindings file",
        description="Write a commented example bindings file.",
    )
    template_parser.add_argument("path", type=Path, metavar="FILE")
    template_parser.set_defaults(func=cmd_template)

    # keys subcommand
    keys_parser = subparsers.add_parser(
        "keys",
        help="list key, character and modifier names",
        description="List the names accepted in bindings files.",
    )
    keys_parser.set_defaults(func=cmd_keys)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
