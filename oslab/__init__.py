"""Small models of operating-system mechanisms: paging, TLBs, locks, atomics and async tasks."""

__version__ = "0.1.0"