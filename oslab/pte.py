"""Bit-level helpers for RISC-V SV39 page table entries.

Layout of a 64-bit entry::

    63..54  reserved
    53..10  physical page number (44 bits)
     9..8   reserved for supervisor software
     7..0   flags: D A G U X W R V
"""

PTE_V = 1 << 0  # valid
PTE_R = 1 << 1  # readable
PTE_W = 1 << 2  # writable
PTE_X = 1 << 3  # executable
PTE_U = 1 << 4  # user accessible
PTE_G = 1 << 5  # global
PTE_A = 1 << 6  # accessed
PTE_D = 1 << 7  # dirty

PPN_SHIFT = 10
PPN_MASK = (1 << 44) - 1
FLAGS_MASK = 0xFF


def make_pte(ppn: int, flags: int) -> int:
    """Build an entry from a physical page number and the low eight flag bits."""
    return ((ppn & PPN_MASK) << PPN_SHIFT) | (flags & FLAGS_MASK)


def extract_ppn(pte: int) -> int:
    """Return the physical page number stored in bits 53..10."""
    return (pte >> PPN_SHIFT) & PPN_MASK


def extract_flags(pte: int) -> int:
    """Return the low eight flag bits."""
    return pte & FLAGS_MASK


def is_valid(pte: int) -> bool:
    """True if the V bit is set."""
    return bool(pte & PTE_V)


def is_leaf(pte: int) -> bool:
    """True if any of R, W or X is set, i.e. the entry maps a page."""
    return bool(pte & (PTE_R | PTE_W | PTE_X))


def check_permission(pte: int, read: bool, write: bool, execute: bool) -> bool:
    """True if the entry is valid and grants every requested kind of access."""
    if not is_valid(pte):
        return False
    flags = extract_flags(pte)
    required = (
        (PTE_R if read else 0)
        | (PTE_W if write else 0)
        | (PTE_X if execute else 0)
    )
    return flags & required == required