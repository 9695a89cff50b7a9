"""Constants for the Max Falcon-8 firmware image."""

from typing import Final

# Physical layout, looking at the top of the keypad:
#
# | 1 | 2 | 3 | 4 |
# |---|---|---|---|
# | 5 | 6 | 7 | 8 |
BUTTON_COUNT: Final[int] = 8

# Single-byte key assignment offset per button (1..8)
BUTTON_OFFSETS: Final[tuple[int, ...]] = (
    0x5189,  # button 1
    0x5181,  # button 2
    0x5179,  # button 3
    0x5149,  # button 4
    0x518A,  # button 5
    0x5182,  # button 6
    0x517A,  # button 7
    0x514A,  # button 8
)

# Keycodes written at a button offset to mean "this button runs a program"
PROGRAM_SENTINELS: Final[tuple[int, ...]] = (
    0xD7,  # button 1
    0xD8,  # button 2
    0xD9,  # button 3
    0xDA,  # button 4
    0xDB,  # button 5
    0xDC,  # button 6
    0xDD,  # button 7
    0xDE,  # button 8
)

# Base offset of each button's program region
PROGRAM_OFFSETS: Final[tuple[int, ...]] = (
    0x539C,  # button 1
    0x56BC,  # button 2
    0x59DC,  # button 3
    0x5CFC,  # button 4
    0x601C,  # button 5
    0x633C,  # button 6
    0x665C,  # button 7
    0x697C,  # button 8
)

# Program region geometry (in bytes)
PROGRAM_REGION_SIZE: Final[int] = 800
PROGRAM_SLOT_SIZE: Final[int] = 8

# Keyboard reports carry at most 6 simultaneous key events
KEYS_PER_STEP: Final[int] = 6

# First byte of the slot that ends a program
STOP_SENTINEL: Final[int] = 0xFD

# "No key", also used for right padding
NO_KEY: Final[int] = 0x00

# Name of the image exposed by the keypad's mass storage volume
FIRMWARE_FILENAME: Final[str] = "firmware.bin"
