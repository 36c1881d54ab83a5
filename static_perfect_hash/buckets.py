# ==================================================
# static_perfect_hash/buckets.py
# ==================================================
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence

from .hashing import hash64, primary_slot


class BucketEntry(NamedTuple):
    index: int      # target index + 1, so 0 stays free for "unclaimed"
    hash: int


@dataclass(frozen=True)
class Bucket:
    slot: int                   # shared primary slot of every entry
    entries: list[BucketEntry]

    def __len__(self) -> int:
        return len(self.entries)


def build_buckets(keys: Sequence[str], size: int) -> list[Bucket]:
    """Group keys by primary slot, largest buckets first.

    Empty slots are left out. The sort is stable, so buckets of equal
    population keep ascending slot order.
    """
    grouped: list[list[BucketEntry]] = [[] for _ in range(size)]
    for idx, key in enumerate(keys):
        h = hash64(key)
        grouped[primary_slot(h, size)].append(BucketEntry(idx + 1, h))

    buckets = [Bucket(slot, entries) for slot, entries in enumerate(grouped) if entries]
    buckets.sort(key=len, reverse=True)
    return buckets
