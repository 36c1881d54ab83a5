# ==================================================
# static_perfect_hash/builder.py
# ==================================================
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .buckets import Bucket, build_buckets
from .const import ARRAY_DTYPE, FIRST_SEED, INT32_MAX, MAX_SEED, UNCLAIMED
from .errors import (DuplicateKeyError, FreeSlotsExhausted,
                     HashCollisionError, SeedSearchExhausted)
from .hashing import next_power_of_two, seeded_slot
from .table import Table

logger = logging.getLogger(__name__)

# seed searches longer than this get a debug line
_SLOW_SEARCH = 1000


@dataclass(frozen=True)
class Placement:
    seed: int
    slots: tuple[int, ...]      # seeded slot per bucket entry, same order


@dataclass(frozen=True)
class Exhausted:
    tried: int


# ── seed search ──────────────────────────────────────────────
def search_seed(bucket: Bucket, claimed: list[int], size: int,
                max_seed: int) -> Union[Placement, Exhausted]:
    """Find the first seed in [1, max_seed] that puts every entry of
    `bucket` on its own slot, none of them already in `claimed`."""
    taken: set[int] = set()
    for seed in range(FIRST_SEED, max_seed + 1):
        taken.clear()
        slots = []
        for entry in bucket.entries:
            slot = seeded_slot(entry.hash, seed, size)
            if slot in taken or claimed[slot] != UNCLAIMED:
                break
            taken.add(slot)
            slots.append(slot)
        else:
            return Placement(seed, tuple(slots))
    return Exhausted(max(0, max_seed - FIRST_SEED + 1))


def place_seeded(buckets: Sequence[Bucket], claimed: list[int], seeds: list[int],
                 size: int, max_seed: int) -> list[Bucket]:
    """Seed every bucket with two or more entries, in the given order.

    Returns the buckets left for the displacement phase.
    """
    for pos, bucket in enumerate(buckets):
        if len(bucket) <= 1:
            return list(buckets[pos:])

        hashes = set()
        for entry in bucket.entries:
            if entry.hash in hashes:
                raise HashCollisionError(bucket.slot, entry.hash)
            hashes.add(entry.hash)

        result = search_seed(bucket, claimed, size, max_seed)
        if isinstance(result, Exhausted):
            raise SeedSearchExhausted(bucket.slot, len(bucket), max_seed)

        if result.seed > _SLOW_SEARCH:
            logger.debug("bucket %d (%d keys) needed seed %d",
                         bucket.slot, len(bucket), result.seed)
        for entry, slot in zip(bucket.entries, result.slots):
            claimed[slot] = entry.index
        seeds[bucket.slot] = result.seed
    return []


# ── displacement ─────────────────────────────────────────────
def place_singletons(singletons: Sequence[Bucket], claimed: list[int],
                     seeds: list[int]) -> None:
    """Move each single-entry bucket straight into a free slot and record
    the slot as a negative offset at its primary slot."""
    free = iter([i for i, v in enumerate(claimed) if v == UNCLAIMED])
    for pos, bucket in enumerate(singletons):
        dst = next(free, None)
        if dst is None:
            raise FreeSlotsExhausted(len(singletons) - pos)
        claimed[dst] = bucket.entries[0].index
        seeds[bucket.slot] = -(dst + 1)


# ── public entry point ───────────────────────────────────────
def build(keys: Sequence[str], *, max_seed: Optional[int] = None) -> Table:
    """Build a minimal perfect hash table over `keys`.

    ``table.query(keys[i]) == i`` for every position. Keys must be
    distinct; a repeated key raises DuplicateKeyError. Construction
    either returns a complete table or raises a ConstructionError.
    """
    cap = MAX_SEED if max_seed is None else min(max_seed, INT32_MAX)

    positions: dict[str, int] = {}
    for idx, key in enumerate(keys):
        first = positions.setdefault(key, idx)
        if first != idx:
            raise DuplicateKeyError(key, first, idx)

    n = len(keys)
    size = next_power_of_two(n)
    if size == 0:
        return Table(np.zeros(0, dtype=ARRAY_DTYPE), np.zeros(0, dtype=ARRAY_DTYPE), 0)

    buckets = build_buckets(keys, size)
    logger.debug("%d keys, size %d, %d buckets, largest %d",
                 n, size, len(buckets), len(buckets[0]))

    claimed = [UNCLAIMED] * size
    seeds = [0] * size
    singletons = place_seeded(buckets, claimed, seeds, size, cap)
    place_singletons(singletons, claimed, seeds)

    # drop the +1 bias; slots nobody claimed read as index 0
    values = [v - 1 if v != UNCLAIMED else 0 for v in claimed]

    logger.info("built table: %d keys, size %d, %d seeded buckets, %d displaced, max seed %d",
                n, size, len(buckets) - len(singletons), len(singletons), max(seeds))
    return Table(np.asarray(values, dtype=ARRAY_DTYPE),
                 np.asarray(seeds, dtype=ARRAY_DTYPE), n)
