"""Reading and writing the keypad's firmware image file."""

import logging
import os
from pathlib import Path

from falcon8.exceptions import FirmwareError, FirmwareSizeError
from falcon8.layout import FALCON8_LAYOUT, DeviceLayout

logger = logging.getLogger(__name__)


def read_firmware(path: str | Path) -> bytearray:
    """Read the whole firmware image into memory.

    Raises:
        FirmwareError: If the file cannot be read.
    """
    p = Path(path)
    try:
        data = bytearray(p.read_bytes())
    except OSError as e:
        msg = f"Unable to read firmware {p}: {e}"
        raise FirmwareError(msg) from e
    logger.debug("Read %d bytes from %s", len(data), p)
    return data


def check_firmware_size(
    buffer: bytes | bytearray,
    layout: DeviceLayout = FALCON8_LAYOUT,
) -> None:
    """Ensure every offset in *layout* lies inside *buffer*.

    Raises:
        FirmwareSizeError: If the image is too small for the layout.
    """
    if len(buffer) < layout.required_size:
        msg = (
            f"Firmware image is {len(buffer)} bytes, but the {layout.name} "
            f"layout needs at least {layout.required_size} bytes"
        )
        raise FirmwareSizeError(msg)


def write_firmware(path: str | Path, buffer: bytes | bytearray) -> int:
    """Write the complete image back to *path* in a single write.

    The file is overwritten from offset 0 without truncating or recreating
    it, then synced to the device.

    Returns:
        Number of bytes written.

    Raises:
        FirmwareError: If the file cannot be opened or written.
    """
    p = Path(path)
    try:
        with p.open("r+b") as f:
            f.seek(0)
            written = f.write(buffer)
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        msg = f"Unable to write firmware {p}: {e}"
        raise FirmwareError(msg) from e

    if written != len(buffer):
        msg = f"Short write to {p}: {written} of {len(buffer)} bytes"
        raise FirmwareError(msg)
    logger.debug("Wrote %d bytes to %s", written, p)
    return written
