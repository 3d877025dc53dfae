"""Assemble a bootable disk image from the boot sector, setup and system parts.

The boot sector and setup parts are Minix executables with a 32-byte header.
The header is checked and dropped. The system part is copied as it is. The
boot sector must be exactly 512 bytes and end in the 0xAA55 boot flag. The
root and swap device numbers are stored in its last bytes. Setup is padded
with zeros to SETUP_SECTS sectors.
"""

import logging
import os
import struct
import sys

# Values the rest of the system is configured with.
UTS_SYSNAME = "Linux"
UTS_NODENAME = "(none)"
UTS_RELEASE = "0"
UTS_VERSION = "0.12"
UTS_MACHINE = "i386"

DEF_INITSEG = 0x9000
DEF_SYSSEG = 0x1000
DEF_SETUPSEG = 0x9020
DEF_SYSSIZE = 0x3000

MINIX_HEADER = 32
GCC_HEADER = 1024

SYS_SIZE = 0x3000  # in 16-byte paragraphs

DEFAULT_MAJOR_ROOT = 3
DEFAULT_MINOR_ROOT = 1
DEFAULT_MAJOR_SWAP = 3
DEFAULT_MINOR_SWAP = 4

SETUP_SECTS = 4
SECTOR_SIZE = 512
BOOT_FLAG = 0xAA55
MINIX_MAGIC = 0x04100301

_BUF_SIZE = 1024
_HEADER_WORDS = struct.Struct("<8i")
_USAGE = "Usage: build bootsect setup system [rootdev] [> image]"

_log = logging.getLogger(__name__)


class BuildError(Exception):
    """The image could not be built; the message says why."""


def device_numbers(rdev):
    """Split a device number into its (major, minor) pair."""
    return (rdev & 0xFFFFFFFF) >> 8, rdev & 0xFF


def check_minix_header(header, name):
    """Check a Minix executable header and return its eight header words."""
    if len(header) < MINIX_HEADER:
        raise BuildError(f"Unable to read header of '{name}'")
    words = _HEADER_WORDS.unpack(bytes(header[:MINIX_HEADER]))
    if words[0] != MINIX_MAGIC or words[1] != MINIX_HEADER:
        raise BuildError(f"Non-Minix header of '{name}'")
    if words[3] != 0:
        raise BuildError(f"Illegal data segment in '{name}'")
    if words[4] != 0:
        raise BuildError(f"Illegal bss in '{name}'")
    if words[5] != 0:
        raise BuildError(f"Non-Minix header of '{name}'")
    if words[7] != 0:
        raise BuildError(f"Illegal symbol table in '{name}'")
    return words


def _check_devices(root_device, swap_device):
    major_root, minor_root = root_device
    major_swap, minor_swap = swap_device
    _log.info("Root device is (%d, %d)", major_root, minor_root)
    _log.info("Swap device is (%d, %d)", major_swap, minor_swap)
    if major_root not in (0, 2, 3):
        _log.error("Illegal root device (major = %d)", major_root)
        raise BuildError("Bad root device --- major #")
    if major_swap and major_swap != 3:
        _log.error("Illegal swap device (major = %d)", major_swap)
        raise BuildError("Bad root device --- major #")


def _boot_sector(bootsect, root_device, swap_device):
    check_minix_header(bootsect, "boot")
    body = bytearray(bootsect[MINIX_HEADER:MINIX_HEADER + _BUF_SIZE])
    _log.info("Boot sector is %d bytes.", len(body))
    if len(body) != SECTOR_SIZE:
        raise BuildError("Boot block must be exactly 512 bytes")
    if int.from_bytes(body[510:512], "little") != BOOT_FLAG:
        raise BuildError("Boot block hasn't got boot flag (0xAA55)")
    major_root, minor_root = root_device
    major_swap, minor_swap = swap_device
    body[506] = minor_swap & 0xFF
    body[507] = major_swap & 0xFF
    body[508] = minor_root & 0xFF
    body[509] = major_root & 0xFF
    return bytes(body)


def _setup_part(setup):
    check_minix_header(setup, "setup")
    body = bytes(setup[MINIX_HEADER:])
    limit = SETUP_SECTS * SECTOR_SIZE
    if len(body) > limit:
        raise BuildError(
            f"Setup exceeds {SETUP_SECTS} sectors - rewrite build/boot/setup"
        )
    _log.info("Setup is %d bytes.", len(body))
    return body.ljust(limit, b"\0")


def _system_part(system):
    body = bytes(system)
    _log.info("System is %d bytes.", len(body))
    if len(body) > SYS_SIZE * 16:
        raise BuildError("System is too big")
    return body


def build_image(bootsect, setup, system, root_device, swap_device):
    """Return the disk image built from the three parts.

    ``root_device`` and ``swap_device`` are (major, minor) pairs.
    """
    _check_devices(root_device, swap_device)
    return (
        _boot_sector(bootsect, root_device, swap_device)
        + _setup_part(setup)
        + _system_part(system)
    )


def _stat_device(path, label):
    try:
        st = os.stat(path)
    except OSError as exc:
        print(f"{path}: {exc.strerror}", file=sys.stderr)
        raise BuildError("Couldn't stat root device.") from None
    return device_numbers(st.st_rdev)


def _read_part(path, label):
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError:
        raise BuildError(f"Unable to open '{label}'") from None


def _build(args):
    if not 3 <= len(args) <= 5:
        raise BuildError(_USAGE)
    if len(args) > 3:
        if args[3] != "FLOPPY":
            root_device = _stat_device(args[3], "root")
        else:
            root_device = (0, 0)
    else:
        root_device = (DEFAULT_MAJOR_ROOT, DEFAULT_MINOR_ROOT)
    if len(args) == 5:
        if args[4] != "NONE":
            swap_device = _stat_device(args[4], "swap")
        else:
            swap_device = (0, 0)
    else:
        swap_device = (DEFAULT_MAJOR_SWAP, DEFAULT_MINOR_SWAP)
    bootsect = _read_part(args[0], "boot")
    setup = _read_part(args[1], "setup")
    system = _read_part(args[2], "system")
    return build_image(bootsect, setup, system, root_device, swap_device)


def main(argv=None):
    """Build the image and write it to standard output; report on stderr."""
    args = list(sys.argv[1:] if argv is None else argv)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _log.addHandler(handler)
    previous_level = _log.level
    _log.setLevel(logging.INFO)
    try:
        image = _build(args)
    except BuildError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        _log.removeHandler(handler)
        _log.setLevel(previous_level)
    sys.stdout.flush()
    sys.stdout.buffer.write(image)
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())