"""Concurrency primitives for infrastructure adapters."""

from campus_ballot.infrastructure.concurrency.keyed_lock import KeyedLock

__all__ = ["KeyedLock"]
