"""Character classification over an 8-bit table, with EOF (-1) allowed."""

from enum import IntFlag


class CharClass(IntFlag):
    """Character property bits."""

    U = 0x01   # upper
    L = 0x02   # lower
    D = 0x04   # digit
    C = 0x08   # control
    P = 0x10   # punctuation
    S = 0x20   # white space
    X = 0x40   # hex digit
    SP = 0x80  # hard space (0x20)


def _build_table():
    U, L, D, C, P, S, X, SP = (
        CharClass.U, CharClass.L, CharClass.D, CharClass.C,
        CharClass.P, CharClass.S, CharClass.X, CharClass.SP,
    )
    table = [CharClass(0)] * 256
    for code in range(256):
        if code < 32:
            cls = C | S if 9 <= code <= 13 else C
        elif code == 32:
            cls = S | SP
        elif 48 <= code <= 57:
            cls = D
        elif 65 <= code <= 70:
            cls = U | X
        elif 71 <= code <= 90:
            cls = U
        elif 97 <= code <= 102:
            cls = L | X
        elif 103 <= code <= 122:
            cls = L
        elif code < 127:
            cls = P
        elif code == 127:
            cls = C
        else:
            cls = CharClass(0)
        table[code] = cls
    return tuple(table)


_TABLE = _build_table()
EOF = -1


def _code(c):
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("expected a single character")
        return ord(c)
    return int(c)


def char_class(c):
    """Return the property bits of a character code, a one-character string or EOF."""
    code = _code(c)
    if code == EOF:
        return CharClass(0)
    if not 0 <= code <= 255:
        raise ValueError(f"character code out of range: {code}")
    return _TABLE[code]


def _has(c, bits):
    return bool(char_class(c) & bits)


def isalnum(c):
    return _has(c, CharClass.U | CharClass.L | CharClass.D)


def isalpha(c):
    return _has(c, CharClass.U | CharClass.L)


def iscntrl(c):
    return _has(c, CharClass.C)


def isdigit(c):
    return _has(c, CharClass.D)


def isgraph(c):
    return _has(c, CharClass.P | CharClass.U | CharClass.L | CharClass.D)


def islower(c):
    return _has(c, CharClass.L)


def isprint(c):
    return _has(c, CharClass.P | CharClass.U | CharClass.L | CharClass.D | CharClass.SP)


def ispunct(c):
    return _has(c, CharClass.P)


def isspace(c):
    return _has(c, CharClass.S)


def isupper(c):
    return _has(c, CharClass.U)


def isxdigit(c):
    return _has(c, CharClass.D | CharClass.X)


def isascii(c):
    """True for codes 0..0x7f; negative codes count as large unsigned values."""
    code = _code(c)
    return 0 <= code <= 0x7F


def toascii(c):
    """Strip the code to its low seven bits."""
    code = _code(c) & 0x7F
    return chr(code) if isinstance(c, str) else code


def _shift(c, test, delta):
    code = _code(c)
    if test(code):
        code += delta
    return chr(code) if isinstance(c, str) else code


def tolower(c):
    """Lower-case an upper-case letter; other characters are returned unchanged."""
    return _shift(c, isupper, ord("a") - ord("A"))


def toupper(c):
    """Upper-case a lower-case letter; other characters are returned unchanged."""
    return _shift(c, islower, ord("A") - ord("a"))