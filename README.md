# oldkern

`oldkern` models pieces of an early Unix-like kernel that make sense outside
a running machine: its character classification table, time values and
descriptor sets, the kernel `vsprintf`, the a.out executable header, the
physical page reference map, and the tool that puts a bootable disk image
together.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a boot image

The `oldkern-build` command joins a boot sector, a setup module and a system
module into one disk image. The boot sector and setup module must carry a
32-byte Minix executable header, which is checked and dropped. The boot
sector must hold exactly 512 bytes ending in the `0xAA55` boot flag; the root
and swap device numbers are written into bytes 506 to 509. The setup module
may take at most four sectors and is padded with zeros to that size. The
system module is copied as it is and may be at most 128 KB. The image goes to
standard output and a short report to standard error.

```
oldkern-build bootsect setup system > Image
oldkern-build bootsect setup system FLOPPY > Image
oldkern-build bootsect setup system /dev/hd1 NONE > Image
```

The optional fourth argument names the root device (`FLOPPY` gives (0, 0),
otherwise the device number of the named device file is used); the optional
fifth names the swap device (`NONE` gives (0, 0)). Without them the defaults
are root device (3, 1) and swap device (3, 4). The root device's major number
must be 0, 2 or 3, and the swap device's 0 or 3. Errors are reported on
standard error and end the command with status 1.

From Python, `oldkern.build.build_image(bootsect, setup, system, root_device,
swap_device)` takes the three parts as bytes and the devices as
`(major, minor)` pairs, returns the image, and raises
`oldkern.build.BuildError` where the command would stop.
`check_minix_header` and `device_numbers` are available on their own.

## Formatting like the kernel

```python
from oldkern.vsprintf import sprintf

sprintf("%08x", 255)      # '000000ff'
sprintf("%-5d|", 42)      # '42   |'
```

`vsprintf(fmt, args)` takes the arguments as a sequence. The supported
conversions are `c`, `s`, `o`, `p`, `x`, `X`, `d`, `i`, `u` and `n`, with the
`-`, `+`, space, `#` and `0` flags, a width and a precision; numbers are
treated as 32-bit values. For `%n` the argument is a mutable sequence whose
first item receives the count of characters written so far.
`log_print(level, fmt, *args)` formats a message, writes it to standard
output and returns it; the `LogLevel` it takes does not filter anything.

## Other modules

- `oldkern.ctype` — the kernel character table: `char_class` returns the
  `CharClass` bits of a code, a one-character string or EOF (-1), and
  `isalpha`, `isdigit`, `isspace`, `isxdigit`, `isascii`, `toascii`,
  `tolower`, `toupper` and the rest follow it.
- `oldkern.timeval` — the ordered `Timeval` with `is_set`, the 32-bit
  `FdSet` with `set`, `clear`, `isset` and `zero`, and `isleap`, which
  counts a century as a leap year only when divisible by 1000.
- `oldkern.aout` — `ExecHeader`, `Symbol` and `RelocationInfo`, read from
  and written to bytes, with the section offsets (`text_offset`,
  `data_offset`, `symbol_offset`, `string_offset`, …) and load addresses
  (`data_address`, `bss_address`) of an a.out file; `Magic` holds the
  OMAGIC, NMAGIC and ZMAGIC values.
- `oldkern.physmem` — `PhysicalMemory`, a reference count for every page
  between 1 MB and 16 MB: `mem_init` reserves all pages and frees the main
  memory range, `get_free_page` takes the highest free page (raising
  `MemoryError` when none is left), `free_page` and `share` drop and add
  references, `refcount` reads one, and `stats` returns a `MemoryStats` of
  free, total and shared pages. Impossible states raise `KernelPanic`.

## What it does not do

The package runs no kernel and touches no hardware. `PhysicalMemory` keeps
only the page reference counts; it holds no page contents, builds no page
tables and pages nothing out to disk. There is no kernel heap allocator, no
swap space handling, no terminal or system-call layer, and no tables of
error numbers, file modes or signals. `oldkern-build` only assembles an
image; it does not compile or link the parts it is given.