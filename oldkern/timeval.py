"""Time values, descriptor sets and related time constants."""

from dataclasses import dataclass

CLOCKS_PER_SEC = 100

DST_NONE = 0
DST_USA = 1
DST_AUST = 2
DST_WET = 3
DST_MET = 4
DST_EET = 5
DST_CAN = 6
DST_GB = 7
DST_RUM = 8
DST_TUR = 9
DST_AUSTALT = 10

ITIMER_REAL = 0
ITIMER_VIRTUAL = 1
ITIMER_PROF = 2

RUSAGE_SELF = 0
RUSAGE_CHILDREN = -1

RLIMIT_CPU = 0
RLIMIT_FSIZE = 1
RLIMIT_DATA = 2
RLIMIT_STACK = 3
RLIMIT_CORE = 4
RLIMIT_RSS = 5
RLIM_NLIMITS = 6
RLIM_INFINITY = 0x7FFFFFFF

FD_SETSIZE = 32


@dataclass(frozen=True, order=True)
class Timeval:
    """Seconds and microseconds; ordered by seconds, then microseconds."""

    sec: int = 0
    usec: int = 0

    def is_set(self):
        return bool(self.sec or self.usec)


def _fd_bit(fd):
    if not 0 <= fd < FD_SETSIZE:
        raise ValueError(f"descriptor out of range: {fd}")
    return 1 << fd


@dataclass
class FdSet:
    """A 32-bit set of file descriptors."""

    mask: int = 0

    def set(self, fd):
        self.mask |= _fd_bit(fd)

    def clear(self, fd):
        self.mask &= ~_fd_bit(fd)

    def isset(self, fd):
        return bool(self.mask & _fd_bit(fd))

    def zero(self):
        self.mask = 0


def isleap(year):
    """Leap-year test as the kernel defines it (centuries divisible by 1000)."""
    return year % 4 == 0 and (year % 100 != 0 or year % 1000 == 0)