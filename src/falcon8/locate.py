"""Finding the keypad's firmware image on mounted volumes.

In programming mode the Falcon-8 shows up as a small removable drive that
holds a single firmware image file.
"""

import logging
from pathlib import Path

import psutil

from falcon8.constants import FIRMWARE_FILENAME
from falcon8.exceptions import FirmwareAmbiguousError, FirmwareNotFoundError

logger = logging.getLogger(__name__)


def _firmware_in(mountpoint: str) -> Path | None:
    try:
        entries = list(Path(mountpoint).iterdir())
    except OSError as e:
        logger.debug("Skipping %s: %s", mountpoint, e)
        return None

    for entry in entries:
        if entry.name.lower() == FIRMWARE_FILENAME and entry.is_file():
            return entry
    return None


def find_firmware_paths() -> list[Path]:
    """Return firmware images found at the root of any mounted volume."""
    found: list[Path] = []
    for partition in psutil.disk_partitions(all=False):
        path = _firmware_in(partition.mountpoint)
        if path is not None:
            logger.debug("Found firmware image %s on %s", path, partition.device)
            found.append(path)
    return found


def locate_firmware() -> Path:
    """Find the single connected keypad's firmware image.

    Raises:
        FirmwareNotFoundError: If no mounted volume holds an image.
        FirmwareAmbiguousError: If more than one does.
    """
    paths = find_firmware_paths()
    if not paths:
        raise FirmwareNotFoundError
    if len(paths) > 1:
        listed = ", ".join(str(p) for p in paths)
        msg = f"Several firmware images found ({listed}); pass --firmware"
        raise FirmwareAmbiguousError(msg)
    return paths[0]
