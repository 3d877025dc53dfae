"""Kernel-style formatted output: a small printf with the kernel's quirks."""

import re
import sys
from enum import IntEnum, IntFlag

_UPPER_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER_DIGITS = _UPPER_DIGITS.lower()
_WORD_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_NUMBER = re.compile(r"[0-9]+")


class LogLevel(IntEnum):
    """Levels accepted by log_print (currently not used to filter output)."""

    INFO = 0
    DEBUG = 1
    WARN = 2


class _Flag(IntFlag):
    ZEROPAD = 1   # pad with zero
    SIGN = 2      # signed conversion
    PLUS = 4      # show plus
    SPACE = 8     # space if plus
    LEFT = 16     # left justified
    SPECIAL = 32  # 0x / 0 prefix
    SMALL = 64    # use 'abcdef' instead of 'ABCDEF'


_FLAG_CHARS = {
    "-": _Flag.LEFT,
    "+": _Flag.PLUS,
    " ": _Flag.SPACE,
    "#": _Flag.SPECIAL,
    "0": _Flag.ZEROPAD,
}


def _digits_of(num, base, digits):
    if num == 0:
        return "0"
    out = []
    while num:
        num, rem = divmod(num, base)
        out.append(digits[rem])
    return "".join(reversed(out))


def _number(num, base, size, precision, flags):
    """Render a 32-bit integer the way the kernel's number() does."""
    if not 2 <= base <= 36:
        raise ValueError(f"unsupported base {base}")
    digits = _LOWER_DIGITS if flags & _Flag.SMALL else _UPPER_DIGITS
    if flags & _Flag.LEFT:
        flags &= ~_Flag.ZEROPAD
    fill = "0" if flags & _Flag.ZEROPAD else " "

    num &= _WORD_MASK
    if flags & _Flag.SIGN and num & _SIGN_BIT:
        sign = "-"
        num = (-num) & _WORD_MASK
    elif flags & _Flag.PLUS:
        sign = "+"
    elif flags & _Flag.SPACE:
        sign = " "
    else:
        sign = ""
    if sign:
        size -= 1

    prefix = ""
    if flags & _Flag.SPECIAL:
        if base == 16:
            prefix = "0" + digits[33]
            size -= 2
        elif base == 8:
            prefix = "0"
            size -= 1

    body = _digits_of(num, base, digits)
    precision = max(precision, len(body))
    size -= precision

    parts = []
    if not flags & (_Flag.ZEROPAD | _Flag.LEFT):
        parts.append(" " * max(size, 0))
        size = 0
    parts.append(sign)
    parts.append(prefix)
    if not flags & _Flag.LEFT:
        parts.append(fill * max(size, 0))
        size = 0
    parts.append("0" * (precision - len(body)))
    parts.append(body)
    parts.append(" " * max(size, 0))
    return "".join(parts)


def vsprintf(fmt, args):
    """Format ``args`` (a sequence) according to ``fmt`` and return the text.

    Supported conversions are c, s, o, p, x, X, d, i, u and n.  For ``%n``
    the argument must be a mutable sequence; the number of characters
    written so far is stored in its first item.
    """
    remaining = iter(args)

    def next_arg():
        try:
            return next(remaining)
        except StopIteration:
            raise ValueError("not enough arguments for format string") from None

    out = []
    pos = 0
    end = len(fmt)
    while pos < end:
        ch = fmt[pos]
        if ch != "%":
            out.append(ch)
            pos += 1
            continue
        pos += 1

        flags = _Flag(0)
        while pos < end and fmt[pos] in _FLAG_CHARS:
            flags |= _FLAG_CHARS[fmt[pos]]
            pos += 1

        # A '*' width or precision consumes its argument but is not stepped
        # over, so the '*' itself ends up as the conversion character.
        width = -1
        match = _NUMBER.match(fmt, pos)
        if match:
            width = int(match.group())
            pos = match.end()
        elif pos < end and fmt[pos] == "*":
            width = int(next_arg())
            if width < 0:
                width = -width
                flags |= _Flag.LEFT

        precision = -1
        if pos < end and fmt[pos] == ".":
            pos += 1
            match = _NUMBER.match(fmt, pos)
            if match:
                precision = int(match.group())
                pos = match.end()
            elif pos < end and fmt[pos] == "*":
                precision = int(next_arg())
            precision = max(precision, 0)

        if pos < end and fmt[pos] in "hlL":
            pos += 1

        conv = fmt[pos] if pos < end else ""
        pos += 1

        if conv == "c":
            value = next_arg()
            code = ord(value) if isinstance(value, str) else int(value)
            pad = " " * max(width - 1, 0)
            char = chr(code & 0xFF)
            out.append(char + pad if flags & _Flag.LEFT else pad + char)
        elif conv == "s":
            text = next_arg()
            if isinstance(text, (bytes, bytearray)):
                text = bytes(text).decode("latin-1")
            if precision >= 0:
                text = text[:precision]
            pad = " " * max(width - len(text), 0)
            out.append(text + pad if flags & _Flag.LEFT else pad + text)
        elif conv == "o":
            out.append(_number(int(next_arg()), 8, width, precision, flags))
        elif conv == "p":
            if width == -1:
                width = 8
                flags |= _Flag.ZEROPAD
            out.append(_number(int(next_arg()), 16, width, precision, flags))
        elif conv in ("x", "X"):
            if conv == "x":
                flags |= _Flag.SMALL
            out.append(_number(int(next_arg()), 16, width, precision, flags))
        elif conv in ("d", "i", "u"):
            if conv != "u":
                flags |= _Flag.SIGN
            out.append(_number(int(next_arg()), 10, width, precision, flags))
        elif conv == "n":
            target = next_arg()
            target[0] = sum(map(len, out))
        else:
            if conv != "%":
                out.append("%")
            out.append(conv)
    return "".join(out)


def sprintf(fmt, *args):
    """Format the positional arguments according to ``fmt``."""
    return vsprintf(fmt, args)


def log_print(level, fmt, *args):
    """Format a message, write it to the console (stdout) and return it."""
    text = vsprintf(fmt, args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return text