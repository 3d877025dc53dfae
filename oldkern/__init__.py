"""Character table, time values, kernel vsprintf, a.out headers, page map and boot image builder."""

__version__ = "0.1.0"