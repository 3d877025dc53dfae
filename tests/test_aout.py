import pytest

from oldkern.aout import (
    HEADER_SIZE,
    N_DATA,
    N_EXT,
    N_TEXT,
    SEGMENT_SIZE,
    ExecHeader,
    Magic,
    RelocationInfo,
    Symbol,
)


def _header(magic=Magic.ZMAGIC, text=1500):
    return ExecHeader(magic, text=text, data=300, bss=40, syms=120,
                      entry=0, trsize=16, drsize=8)


def test_header_round_trip():
    header = _header()
    data = header.to_bytes()
    assert len(data) == HEADER_SIZE
    assert ExecHeader.from_bytes(data) == header


def test_header_magic_wire_bytes():
    assert ExecHeader(Magic.ZMAGIC).to_bytes()[:4] == b"\x0b\x01\x00\x00"


def test_header_too_short():
    with pytest.raises(ValueError):
        ExecHeader.from_bytes(bytes(HEADER_SIZE - 1))


@pytest.mark.parametrize("magic", list(Magic))
def test_known_magic_is_good(magic):
    assert ExecHeader(magic).is_bad_magic() is False


def test_unknown_magic_is_bad():
    assert ExecHeader(0x1234).is_bad_magic() is True


def test_text_offset_depends_on_magic():
    assert _header(Magic.ZMAGIC).text_offset() == SEGMENT_SIZE
    assert _header(Magic.OMAGIC).text_offset() == HEADER_SIZE
    assert _header(Magic.NMAGIC).text_offset() == HEADER_SIZE


@pytest.mark.parametrize("magic", list(Magic))
def test_offsets_follow_each_other(magic):
    h = _header(magic)
    assert h.data_offset() == h.text_offset() + h.text
    assert h.text_reloc_offset() == h.data_offset() + h.data
    assert h.data_reloc_offset() == h.text_reloc_offset() + h.trsize
    assert h.symbol_offset() == h.data_reloc_offset() + h.drsize
    assert h.string_offset() == h.symbol_offset() + h.syms


def test_omagic_data_follows_text():
    h = _header(Magic.OMAGIC)
    assert h.data_address() == h.text
    assert h.bss_address() == h.text + h.data


@pytest.mark.parametrize("magic", [Magic.NMAGIC, Magic.ZMAGIC])
@pytest.mark.parametrize("text", [0, 1, 1024, 1500, 4097])
def test_paged_data_is_segment_aligned(magic, text):
    h = _header(magic, text=text)
    address = h.data_address()
    assert address % SEGMENT_SIZE == 0
    assert text <= address < text + SEGMENT_SIZE
    assert h.bss_address() == address + h.data


def test_symbol_round_trip():
    sym = Symbol(strx=4, type=N_TEXT | N_EXT, other=-1, desc=-7, value=0x400)
    data = sym.to_bytes()
    assert len(data) == Symbol.SIZE
    assert Symbol.from_bytes(data) == sym


def test_symbol_type_bits():
    sym = Symbol(strx=0, type=N_DATA | N_EXT)
    assert sym.external is True
    assert sym.kind == N_DATA
    assert sym.is_stab is False


def test_symbol_too_short():
    with pytest.raises(ValueError):
        Symbol.from_bytes(b"\x00\x00")


def test_relocation_round_trip():
    rel = RelocationInfo(address=-8, symbolnum=0xABCDE, pcrel=True,
                         length=1, extern=True, pad=0)
    data = rel.to_bytes()
    assert len(data) == RelocationInfo.SIZE
    assert RelocationInfo.from_bytes(data) == rel


def test_relocation_pcrel_bit_position():
    rel = RelocationInfo(address=0, symbolnum=0, pcrel=True, length=0)
    assert rel.to_bytes() == bytes(7) + b"\x01"


def test_relocation_width():
    assert RelocationInfo(address=0, symbolnum=0, length=2).width == 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"symbolnum": 1 << 24},
        {"symbolnum": -1},
        {"symbolnum": 0, "length": 4},
        {"symbolnum": 0, "pad": 16},
    ],
)
def test_relocation_field_ranges(kwargs):
    with pytest.raises(ValueError):
        RelocationInfo(address=0, **kwargs)