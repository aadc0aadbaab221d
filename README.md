# oslab

Small, readable models of the mechanisms an operating system is built from.
Each module stands on its own. You import it and experiment with it; there
is no command-line program. The package needs nothing outside the standard
library.

## Installation

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Modules

### Memory management

- `oslab.pte` builds and inspects RISC-V SV39 page-table entries. It
  provides `make_pte`, `extract_ppn`, `extract_flags`, `is_valid`,
  `is_leaf` and `check_permission`, together with the flag constants
  `PTE_V`, `PTE_R`, `PTE_W`, `PTE_X`, `PTE_U`, `PTE_G`, `PTE_A` and `PTE_D`.
- `oslab.page_table` is a single-level page table with 4 KiB pages.
  - `SingleLevelPageTable(max_pages)` has `map`, `unmap`, `lookup` and
    `translate(va, is_write)`.
  - `translate` returns the physical address. It raises `PageFault` when the
    page is unmapped or not valid. It raises `PermissionDenied` when the
    page lacks read permission, or lacks write permission for a write.
  - `map` and `unmap` raise `IndexError` for a page outside the table.
  - `lookup` returns a `PageTableEntry`, or `None`.
  - The helpers are `va_to_vpn`, `va_to_offset` and `make_pa`.
- `oslab.sv39` is a three-level SV39 page table.
  - `Sv39PageTable` maps 4 KiB pages with `map_page` and 2 MiB superpages
    with `map_superpage`. `map_superpage` raises `ValueError` unless both
    addresses are 2 MiB aligned.
  - `translate(va)` walks the table and returns the physical address. It
    raises `oslab.page_table.PageFault` on a miss.
  - The module also provides `extract_vpn(va, level)` and `PageTableNode`.
- `oslab.tlb` models a TLB and an MMU.
  - `Tlb(capacity)` is a TLB with first-in first-out replacement. It has
    `lookup`, `insert`, `flush_all`, `flush_by_vpn`, `flush_by_asid` and
    `valid_count`.
  - Hit and miss counts are kept in `Tlb.stats`, a `TlbStats` with a
    `hit_rate()` method.
  - `Mmu(tlb_capacity)` holds a TLB and a list of `PageMapping`s, which you
    add with `add_mapping`. `switch_asid` changes the current address space.
  - `Mmu.translate(vpn)` checks the TLB first. On a miss it looks in the
    page table and refills the TLB. It returns `None` on a page fault.

### Concurrency primitives

- `oslab.atomic_counter` provides `AtomicCounter`, a thread-safe unsigned
  64-bit counter.
  - `increment` and `decrement` wrap around at 64 bits. `get` returns the
    current value.
  - `compare_and_swap` raises `CompareAndSwapError`, which carries the
    actual value in `.actual`, when the swap fails.
  - `fetch_multiply` raises `OverflowError` if the product would not fit in
    64 bits.
- `oslab.sync_flags` provides two small synchronisation objects. Both take
  unsigned 32-bit values only.
  - `FlagChannel` is a one-slot hand-off with `produce`, `consume` (which
    blocks until a value is ready) and `reset`.
  - `OnceCell` is a cell whose `init` succeeds exactly once. `get` returns
    the value, or `None` while the cell is empty.
- `oslab.spinlock` provides `SpinLock(data)`.
  - `lock` spins until the lock is free. `try_lock` returns `None` when the
    lock is busy. Both hand back a `SpinGuard`.
  - The protected data is read and replaced through `SpinGuard.value`.
  - The lock is released by `SpinLock.unlock`, by `SpinGuard.release`, or on
    leaving a `with lock.guard() as g:` block.
- `oslab.rwlock` provides `RwLock(data)`, a read-write lock that gives
  writers priority: while a writer waits, new readers block.
  - `read` returns a `ReadGuard` and `write` returns a `WriteGuard`.
  - Both guards expose `value`; only a `WriteGuard` can replace it.
  - Both guards release the lock through `release` or on leaving a `with`
    block.

### Asynchronous programming

- `oslab.futures` provides two hand-written awaitables. `CountDown(n)`
  yields to the event loop `n` times and then returns `"liftoff!"`.
  `YieldOnce()` yields once and then completes.
- `oslab.tasks` runs work in concurrent tasks.
  - `concurrent_squares(n)` returns the squares of `range(n)` in order.
  - `parallel_sleep_tasks(n, duration_ms)` returns `[0, …, n-1]`. Its tasks
    sleep concurrently, so the call takes about one sleep.
- `oslab.channels` connects tasks through a bounded queue.
  - `producer_consumer(items)` passes items from a producer task to a
    consumer task.
  - `fan_in(n)` collects and sorts one message from each of `n` producers.
    It raises `ValueError` for fewer than one producer.
- `oslab.racing` races awaitables.
  - `with_timeout(awaitable, timeout_ms)` returns the result, or `None` on
    timeout.
  - `race(first, second)` returns the first result and cancels the other
    awaitable.

## Examples

Translating addresses through a three-level page table:

```python
from oslab.sv39 import Sv39PageTable
from oslab.pte import PTE_V, PTE_R, PTE_W

pt = Sv39PageTable()
pt.map_page(0x2000, 0x90000000, PTE_V | PTE_R | PTE_W)
assert pt.translate(0x2ABC) == 0x90000ABC
```

Counting TLB hits and misses through the MMU:

```python
from oslab.tlb import Mmu

mmu = Mmu(4)
mmu.add_mapping(1, 0x100, 0x200, 0x7)
mmu.switch_asid(1)
mmu.translate(0x100)   # miss, filled from the page table
mmu.translate(0x100)   # hit
print(mmu.tlb.stats.hit_rate())   # 0.5
```

Scoped locking:

```python
from oslab.spinlock import SpinLock

lock = SpinLock([])
with lock.guard() as g:
    g.value.append(1)
assert not lock.locked
```

Racing two coroutines:

```python
import asyncio
from oslab.racing import race

async def slow():
    await asyncio.sleep(0.2)
    return "slow"

async def fast():
    await asyncio.sleep(0.01)
    return "fast"

print(asyncio.run(race(slow(), fast())))   # fast
```

## What oslab does not do

- oslab does not model register-level context switching, coroutine stacks
  or a green-thread scheduler. Its asynchronous modules are built on
  `asyncio`.
- Its locks and atomics are built on the standard `threading` module. They
  show the protocols, not hardware memory ordering.