"""Physical page accounting: one reference count per page above the low megabyte."""

from dataclasses import dataclass

PAGE_SIZE = 4096

LOW_MEM = 0x100000
PAGING_MEMORY = 15 * 1024 * 1024
PAGING_PAGES = PAGING_MEMORY >> 12
USED = 100

# Page table entry bits.
PAGE_DIRTY = 0x40
PAGE_ACCESSED = 0x20
PAGE_USER = 0x04
PAGE_RW = 0x02
PAGE_PRESENT = 0x01


class KernelPanic(RuntimeError):
    """The page bookkeeping found an impossible state."""


@dataclass(frozen=True)
class MemoryStats:
    """Counts over the pages that are not reserved."""

    free: int
    total: int
    shared: int


def _map_nr(addr):
    return (addr - LOW_MEM) >> 12


class PhysicalMemory:
    """The map of physical pages between LOW_MEM and the top of memory.

    Each entry holds the number of users of a page; reserved pages hold USED.
    """

    def __init__(self, start_mem=None, end_mem=None):
        self.high_memory = 0
        self.mem_map = bytearray(PAGING_PAGES)
        if start_mem is not None and end_mem is not None:
            self.mem_init(start_mem, end_mem)

    def mem_init(self, start_mem, end_mem):
        """Reserve every page, then free those from start_mem up to end_mem."""
        self.high_memory = end_mem
        self.mem_map[:] = bytes([USED]) * PAGING_PAGES
        first = _map_nr(start_mem)
        count = max((end_mem - start_mem) >> 12, 0)
        for nr in range(first, min(first + count, PAGING_PAGES)):
            self.mem_map[nr] = 0

    def get_free_page(self):
        """Take the highest free page, mark it used and return its address.

        Raise MemoryError when no free page is left.
        """
        for nr in reversed(range(PAGING_PAGES)):
            if self.mem_map[nr]:
                continue
            addr = LOW_MEM + (nr << 12)
            if addr >= self.high_memory:
                continue
            self.mem_map[nr] = 1
            return addr
        raise MemoryError("out of memory")

    def free_page(self, addr):
        """Drop one reference to the page holding addr.

        Addresses below LOW_MEM are ignored.
        """
        if addr < LOW_MEM:
            return
        if addr >= self.high_memory:
            raise KernelPanic("trying to free nonexistent page")
        nr = _map_nr(addr)
        if self.mem_map[nr]:
            self.mem_map[nr] -= 1
            return
        raise KernelPanic("trying to free free page")

    def share(self, addr):
        """Add a reference to the page holding addr, as a copied page table does.

        Pages at or below LOW_MEM are shared with the kernel and not counted.
        """
        if addr <= LOW_MEM:
            return
        if addr >= self.high_memory:
            raise KernelPanic("trying to share nonexistent page")
        nr = _map_nr(addr)
        if self.mem_map[nr] >= 0xFF:
            raise KernelPanic("page reference count overflow")
        self.mem_map[nr] += 1

    def refcount(self, addr):
        """The number of users of the page holding addr."""
        if not LOW_MEM <= addr < LOW_MEM + PAGING_MEMORY:
            raise ValueError(f"address outside paged memory: {addr:#x}")
        return self.mem_map[_map_nr(addr)]

    def stats(self):
        """Count free, total and shared pages, leaving out reserved ones."""
        free = total = shared = 0
        for count in self.mem_map:
            if count == USED:
                continue
            total += 1
            if count == 0:
                free += 1
            else:
                shared += count - 1
        return MemoryStats(free=free, total=total, shared=shared)