"""A simulated TLB with FIFO replacement and an MMU that fills it from a page table."""

from dataclasses import dataclass, field


@dataclass
class TlbEntry:
    """One cached translation, tagged with its address-space identifier."""

    valid: bool = False
    asid: int = 0
    vpn: int = 0
    ppn: int = 0
    flags: int = 0

    def matches(self, vpn: int, asid: int) -> bool:
        """True if the entry is valid and tagged with ``vpn`` and ``asid``."""
        return self.valid and self.vpn == vpn and self.asid == asid


@dataclass
class TlbStats:
    """Hit and miss counters for lookups."""

    hits: int = 0
    misses: int = 0

    def hit_rate(self) -> float:
        """Fraction of lookups that hit, or 0.0 when there were none."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class Tlb:
    """Fixed-size translation cache with first-in first-out replacement."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._entries = [TlbEntry() for _ in range(capacity)]
        self._fifo_ptr = 0
        self.stats = TlbStats()

    def _find(self, vpn: int, asid: int) -> TlbEntry | None:
        return next((e for e in self._entries if e.matches(vpn, asid)), None)

    def lookup(self, vpn: int, asid: int) -> int | None:
        """Return the cached physical page number, or None on a miss."""
        entry = self._find(vpn, asid)
        if entry is None:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        return entry.ppn

    def insert(self, vpn: int, ppn: int, asid: int, flags: int) -> None:
        """Cache a translation, updating an existing entry or evicting the oldest slot.

        Raises IndexError if the TLB has no slots.
        """
        entry = self._find(vpn, asid)
        if entry is not None:
            entry.ppn = ppn
            entry.flags = flags
            return
        if not self._entries:
            raise IndexError("cannot insert into a TLB with no slots")
        self._entries[self._fifo_ptr] = TlbEntry(True, asid, vpn, ppn, flags)
        self._fifo_ptr = (self._fifo_ptr + 1) % self.capacity

    def flush_all(self) -> None:
        """Invalidate every entry."""
        for entry in self._entries:
            entry.valid = False

    def flush_by_vpn(self, vpn: int) -> None:
        """Invalidate entries for ``vpn`` in every address space."""
        for entry in self._entries:
            if entry.vpn == vpn:
                entry.valid = False

    def flush_by_asid(self, asid: int) -> None:
        """Invalidate every entry of address space ``asid``."""
        for entry in self._entries:
            if entry.asid == asid:
                entry.valid = False

    def valid_count(self) -> int:
        """Number of valid entries."""
        return sum(entry.valid for entry in self._entries)


@dataclass(frozen=True)
class PageMapping:
    """A page-table mapping used by the simulated MMU."""

    vpn: int
    ppn: int
    flags: int


@dataclass
class Mmu:
    """Translates through the TLB first and falls back to the page table."""

    tlb_capacity: int
    current_asid: int = 0
    tlb: Tlb = field(init=False)
    _page_table: list[tuple[int, PageMapping]] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.tlb = Tlb(self.tlb_capacity)

    def add_mapping(self, asid: int, vpn: int, ppn: int, flags: int) -> None:
        """Add a mapping for ``vpn`` in address space ``asid``."""
        self._page_table.append((asid, PageMapping(vpn, ppn, flags)))

    def switch_asid(self, new_asid: int) -> None:
        """Make ``new_asid`` the current address space."""
        self.current_asid = new_asid

    def translate(self, vpn: int) -> int | None:
        """Return the physical page number for ``vpn``, or None on a page fault.

        A TLB miss that hits in the page table refills the TLB.
        """
        ppn = self.tlb.lookup(vpn, self.current_asid)
        if ppn is not None:
            return ppn
        for asid, mapping in self._page_table:
            if asid == self.current_asid and mapping.vpn == vpn:
                self.tlb.insert(vpn, mapping.ppn, asid, mapping.flags)
                return mapping.ppn
        return None