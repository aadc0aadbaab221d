"""A single-level page table with 4 KiB pages and 32-bit virtual addresses."""

from dataclasses import dataclass

PAGE_SIZE = 4096
PAGE_OFFSET_BITS = 12
_OFFSET_MASK = (1 << PAGE_OFFSET_BITS) - 1

PTE_VALID = 1 << 0
PTE_READ = 1 << 1
PTE_WRITE = 1 << 2


class PageFault(Exception):
    """Raised when a virtual page is unmapped or its entry is not valid."""


class PermissionDenied(Exception):
    """Raised when an access is not allowed by the entry's flags."""


@dataclass(frozen=True)
class PageTableEntry:
    """One mapping: physical page number and flag bits."""

    ppn: int
    flags: int


def va_to_vpn(va: int) -> int:
    """Virtual page number: the bits above the page offset."""
    return va >> PAGE_OFFSET_BITS


def va_to_offset(va: int) -> int:
    """Offset within the page: the low twelve bits."""
    return va & _OFFSET_MASK


def make_pa(ppn: int, offset: int) -> int:
    """Physical address from a physical page number and an offset."""
    return ppn * PAGE_SIZE + offset


class SingleLevelPageTable:
    """A flat table of optional entries indexed by virtual page number."""

    def __init__(self, max_pages: int) -> None:
        self._entries: list[PageTableEntry | None] = [None] * max_pages

    def __len__(self) -> int:
        return len(self._entries)

    def _check_index(self, vpn: int) -> None:
        if not 0 <= vpn < len(self._entries):
            raise IndexError(
                f"virtual page {vpn} outside table of {len(self._entries)} pages"
            )

    def map(self, vpn: int, ppn: int, flags: int) -> None:
        """Map virtual page ``vpn`` to physical page ``ppn`` with ``flags``."""
        self._check_index(vpn)
        self._entries[vpn] = PageTableEntry(ppn, flags)

    def unmap(self, vpn: int) -> None:
        """Remove any mapping for ``vpn``."""
        self._check_index(vpn)
        self._entries[vpn] = None

    def lookup(self, vpn: int) -> PageTableEntry | None:
        """Return the entry for ``vpn``, or None if unmapped or out of range."""
        if 0 <= vpn < len(self._entries):
            return self._entries[vpn]
        return None

    def translate(self, va: int, is_write: bool) -> int:
        """Translate ``va`` to a physical address.

        Raises PageFault for unmapped or invalid pages and PermissionDenied
        when the page lacks read permission, or write permission for writes.
        """
        vpn = va_to_vpn(va)
        entry = self.lookup(vpn)
        if entry is None or not entry.flags & PTE_VALID:
            raise PageFault(f"page fault at {va:#x} (vpn {vpn:#x})")
        required = PTE_READ | PTE_WRITE if is_write else PTE_READ
        if entry.flags & required != required:
            kind = "write" if is_write else "read"
            raise PermissionDenied(f"{kind} access denied at {va:#x}")
        return make_pa(entry.ppn, va_to_offset(va))