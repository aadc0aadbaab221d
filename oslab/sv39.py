"""A simulated RISC-V SV39 three-level page table.

Page-table pages live in a dictionary keyed by physical page number instead
of real physical memory. Virtual addresses are 39 bits wide::

    38..30  VPN[2]
    29..21  VPN[1]
    20..12  VPN[0]
    11..0   page offset
"""

from dataclasses import dataclass, field

from oslab.page_table import PageFault

PAGE_SIZE = 4096
PT_ENTRIES = 512
SUPERPAGE_SIZE = PAGE_SIZE * PT_ENTRIES

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3

PPN_SHIFT = 10
_NEXT_PPN_MASK = 0xFF_FFFF_FFFF
_PAGE_OFFSET_MASK = PAGE_SIZE - 1
_SUPERPAGE_OFFSET_MASK = SUPERPAGE_SIZE - 1
_LEAF_BITS = PTE_R | PTE_W | PTE_X


def extract_vpn(va: int, level: int) -> int:
    """Return the nine-bit VPN index of ``va`` for ``level`` (0, 1 or 2)."""
    return (va >> (12 + level * 9)) & 0x1FF


@dataclass
class PageTableNode:
    """One page-table page: 512 raw 64-bit entries."""

    entries: list[int] = field(default_factory=lambda: [0] * PT_ENTRIES)


class Sv39PageTable:
    """Three-level page table with a bump allocator for table pages."""

    def __init__(self) -> None:
        self.root_ppn = 0x80000
        self._next_ppn = 0x80001
        self._nodes: dict[int, PageTableNode] = {self.root_ppn: PageTableNode()}

    def _alloc_node(self) -> int:
        ppn = self._next_ppn
        self._next_ppn += 1
        self._nodes[ppn] = PageTableNode()
        return ppn

    def _node(self, ppn: int) -> PageTableNode:
        try:
            return self._nodes[ppn]
        except KeyError:
            raise KeyError(f"page table node {ppn:#x} not found") from None

    def _descend(self, ppn: int, vpn: int) -> int:
        """Follow entry ``vpn`` of node ``ppn``, allocating a child if invalid."""
        node = self._node(ppn)
        if not node.entries[vpn] & PTE_V:
            child = self._alloc_node()
            node.entries[vpn] = (child << PPN_SHIFT) | PTE_V
        return (node.entries[vpn] >> PPN_SHIFT) & _NEXT_PPN_MASK

    def map_page(self, va: int, pa: int, flags: int) -> None:
        """Map the 4 KiB page containing ``va`` to the one containing ``pa``."""
        va &= ~_PAGE_OFFSET_MASK
        pa &= ~_PAGE_OFFSET_MASK
        ppn = self.root_ppn
        for level in (2, 1):
            ppn = self._descend(ppn, extract_vpn(va, level))
        leaf = self._node(ppn)
        leaf.entries[extract_vpn(va, 0)] = ((pa >> 12) << PPN_SHIFT) | flags

    def map_superpage(self, va: int, pa: int, flags: int) -> None:
        """Map a 2 MiB superpage with a leaf entry at level 1.

        Raises ValueError unless both addresses are 2 MiB aligned.
        """
        if va % SUPERPAGE_SIZE:
            raise ValueError("va must be 2MB-aligned")
        if pa % SUPERPAGE_SIZE:
            raise ValueError("pa must be 2MB-aligned")
        ppn = self._descend(self.root_ppn, extract_vpn(va, 2))
        node = self._node(ppn)
        node.entries[extract_vpn(va, 1)] = ((pa >> 12) << PPN_SHIFT) | flags

    def translate(self, va: int) -> int:
        """Walk the table and return the physical address for ``va``.

        Raises PageFault when an entry on the way is invalid or missing.
        """
        ppn = self.root_ppn
        for level in (2, 1, 0):
            node = self._nodes.get(ppn)
            if node is None:
                raise PageFault(f"page fault at {va:#x}: no table at {ppn:#x}")
            pte = node.entries[extract_vpn(va, level)]
            if not pte & PTE_V:
                raise PageFault(f"page fault at {va:#x} (level {level})")
            if pte & _LEAF_BITS:
                if level == 1:
                    offset = va & _SUPERPAGE_OFFSET_MASK
                else:
                    offset = va & _PAGE_OFFSET_MASK
                return ((pte >> PPN_SHIFT) << 12) | offset
            ppn = (pte >> PPN_SHIFT) & _NEXT_PPN_MASK
        raise PageFault(f"page fault at {va:#x}: no leaf at level 0")