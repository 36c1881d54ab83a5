# ==================================================
# static_perfect_hash/table.py
# ==================================================
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .const import ARRAY_DTYPE, INT32_MAX
from .errors import EmptyTableError, InvalidTableError
from .hashing import hash64, next_power_of_two, primary_slot, seeded_slot


# ── tagged view of one seeds[] entry ─────────────────────────
@dataclass(frozen=True)
class Seeded:
    seed: int       # rehash with this seed


@dataclass(frozen=True)
class Direct:
    slot: int       # value lives at values[slot]


@dataclass(frozen=True)
class Unassigned:
    pass


SlotEntry = Union[Seeded, Direct, Unassigned]


def _frozen(arr) -> np.ndarray:
    out = np.array(arr, dtype=ARRAY_DTYPE, copy=True)
    out.flags.writeable = False
    return out


class Table:
    """Immutable minimal perfect hash table; see `build`."""

    __slots__ = ("values", "seeds", "key_count")

    def __init__(self, values: np.ndarray, seeds: np.ndarray, key_count: int):
        object.__setattr__(self, "values", _frozen(values))
        object.__setattr__(self, "seeds", _frozen(seeds))
        object.__setattr__(self, "key_count", key_count)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return self.key_count

    def __repr__(self) -> str:
        return f"Table(keys={self.key_count}, size={self.size})"

    # ------------------------------------------------------------------
    def query(self, key: str) -> int:
        """Index of `key` in the sequence the table was built from.

        Keys outside that sequence get some index in [0, len(table));
        compare against the original key when membership matters.
        """
        size = len(self.values)
        if size == 0:
            raise EmptyTableError("table was built from zero keys")
        h = hash64(key)
        seed = int(self.seeds[primary_slot(h, size)])
        if seed < 0:
            return int(self.values[-seed - 1])
        return int(self.values[seeded_slot(h, seed, size)])

    def entry(self, slot: int) -> SlotEntry:
        seed = int(self.seeds[slot])
        if seed < 0:
            return Direct(-seed - 1)
        if seed == 0:
            return Unassigned()
        return Seeded(seed)

    # ── array form ───────────────────────────────────────────────
    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """(values, seeds) as read-only int32 arrays."""
        return self.values, self.seeds

    @classmethod
    def from_arrays(cls, values, seeds, key_count: Optional[int] = None) -> "Table":
        values = np.asarray(values)
        seeds = np.asarray(seeds)
        if values.ndim != 1 or seeds.ndim != 1:
            raise InvalidTableError("values and seeds must be one-dimensional")
        size = len(values)
        if len(seeds) != size:
            raise InvalidTableError(f"length mismatch: {size} values, {len(seeds)} seeds")
        if size & (size - 1):
            raise InvalidTableError(f"size {size} is not a power of two")
        if size == 0:
            if key_count:
                raise InvalidTableError(f"key count {key_count} does not fit size 0")
            return cls(values, seeds, 0)

        if values.min() < 0 or seeds.max() > INT32_MAX or seeds.min() < -size:
            raise InvalidTableError("values or seeds out of range")
        if key_count is None:
            key_count = int(values.max()) + 1
        if key_count < 1 or next_power_of_two(key_count) != size or values.max() >= key_count:
            raise InvalidTableError(f"key count {key_count} does not fit size {size}")
        return cls(values, seeds, key_count)
