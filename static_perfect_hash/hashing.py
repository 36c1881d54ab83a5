# ==================================================
# static_perfect_hash/hashing.py
# ==================================================
import xxhash

from .const import MASK64, MIX_MULTIPLIER


# ── key hashing ──────────────────────────────────────────────
def hash64(key: str) -> int:
    """64‑bit xxHash of the UTF‑8 key; stable across processes."""
    return xxhash.xxh64_intdigest(key.encode("utf-8"))


def xorshift_mult64(x: int) -> int:
    x &= MASK64
    x ^= x >> 12
    x ^= (x << 25) & MASK64
    x ^= x >> 27
    return (x * MIX_MULTIPLIER) & MASK64


# ── slot reductions (size is a power of two) ─────────────────
def primary_slot(h: int, size: int) -> int:
    return h & (size - 1)


def seeded_slot(h: int, seed: int, size: int) -> int:
    return xorshift_mult64(h + seed) & (size - 1)


def next_power_of_two(n: int) -> int:
    if n < 0:
        raise ValueError(f"negative key count: {n}")
    if n == 0:
        return 0
    return 1 << (n - 1).bit_length()
