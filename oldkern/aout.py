"""The a.out executable header, symbol table entries and relocation records."""

import struct
from dataclasses import dataclass
from enum import IntEnum

PAGE_SIZE = 4096
SEGMENT_SIZE = 1024

# Symbol types.
N_UNDF = 0
N_ABS = 2
N_TEXT = 4
N_DATA = 6
N_BSS = 8
N_COMM = 18
N_FN = 15
N_EXT = 1
N_TYPE = 0o36
N_STAB = 0o340
N_INDR = 0xA
N_SETA = 0x14
N_SETT = 0x16
N_SETD = 0x18
N_SETB = 0x1A
N_SETV = 0x1C

_HEADER = struct.Struct("<8I")
_NLIST = struct.Struct("<iBbhI")
_RELOC = struct.Struct("<iI")

HEADER_SIZE = _HEADER.size


class Magic(IntEnum):
    """Executable magic numbers."""

    OMAGIC = 0o407  # object file or impure executable
    NMAGIC = 0o410  # pure executable
    ZMAGIC = 0o413  # demand-paged executable


def _segment_round(value):
    return (value + SEGMENT_SIZE - 1) & ~(SEGMENT_SIZE - 1)


def _require(data, size, what):
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")
    return bytes(data[:size])


@dataclass(frozen=True)
class ExecHeader:
    """The 32-byte header at the start of an a.out file."""

    magic: int
    text: int = 0
    data: int = 0
    bss: int = 0
    syms: int = 0
    entry: int = 0
    trsize: int = 0
    drsize: int = 0

    @classmethod
    def from_bytes(cls, data):
        return cls(*_HEADER.unpack(_require(data, HEADER_SIZE, "exec header")))

    def to_bytes(self):
        return _HEADER.pack(
            self.magic, self.text, self.data, self.bss,
            self.syms, self.entry, self.trsize, self.drsize,
        )

    def is_bad_magic(self):
        return self.magic not in (Magic.OMAGIC, Magic.NMAGIC, Magic.ZMAGIC)

    def text_offset(self):
        if self.magic == Magic.ZMAGIC:
            return (SEGMENT_SIZE - HEADER_SIZE) + HEADER_SIZE
        return HEADER_SIZE

    def data_offset(self):
        return self.text_offset() + self.text

    def text_reloc_offset(self):
        return self.data_offset() + self.data

    def data_reloc_offset(self):
        return self.text_reloc_offset() + self.trsize

    def symbol_offset(self):
        return self.data_reloc_offset() + self.drsize

    def string_offset(self):
        return self.symbol_offset() + self.syms

    @property
    def text_address(self):
        return 0

    def data_address(self):
        text_end = self.text_address + self.text
        if self.magic == Magic.OMAGIC:
            return text_end
        return _segment_round(text_end)

    def bss_address(self):
        return self.data_address() + self.data


@dataclass(frozen=True)
class Symbol:
    """A symbol table entry (nlist)."""

    strx: int
    type: int = N_UNDF
    other: int = 0
    desc: int = 0
    value: int = 0

    SIZE = _NLIST.size

    @classmethod
    def from_bytes(cls, data):
        return cls(*_NLIST.unpack(_require(data, cls.SIZE, "symbol")))

    def to_bytes(self):
        return _NLIST.pack(self.strx, self.type, self.other, self.desc, self.value)

    @property
    def external(self):
        return bool(self.type & N_EXT)

    @property
    def kind(self):
        return self.type & N_TYPE

    @property
    def is_stab(self):
        return bool(self.type & N_STAB)


@dataclass(frozen=True)
class RelocationInfo:
    """One relocation record for the text or data segment."""

    address: int
    symbolnum: int
    pcrel: bool = False
    length: int = 2
    extern: bool = False
    pad: int = 0

    SIZE = _RELOC.size

    def __post_init__(self):
        if not 0 <= self.symbolnum < 1 << 24:
            raise ValueError(f"symbolnum out of range: {self.symbolnum}")
        if not 0 <= self.length <= 3:
            raise ValueError(f"length out of range: {self.length}")
        if not 0 <= self.pad <= 15:
            raise ValueError(f"pad out of range: {self.pad}")

    @property
    def width(self):
        """Width in bytes of the field being relocated."""
        return 1 << self.length

    @classmethod
    def from_bytes(cls, data):
        address, bits = _RELOC.unpack(_require(data, cls.SIZE, "relocation"))
        return cls(
            address=address,
            symbolnum=bits & 0xFFFFFF,
            pcrel=bool((bits >> 24) & 1),
            length=(bits >> 25) & 3,
            extern=bool((bits >> 27) & 1),
            pad=(bits >> 28) & 0xF,
        )

    def to_bytes(self):
        bits = (
            self.symbolnum
            | int(self.pcrel) << 24
            | self.length << 25
            | int(self.extern) << 27
            | self.pad << 28
        )
        return _RELOC.pack(self.address, bits)