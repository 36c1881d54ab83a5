# ==================================================
# static_perfect_hash/const.py
# ==================================================
import os

import numpy as np

MASK64         = (1 << 64) - 1
MIX_MULTIPLIER = 2685821657736338717   # odd; xorshift‑multiply final step
INT32_MAX      = (1 << 31) - 1

UNCLAIMED      = 0                     # values[] sentinel while building (+1 bias)
NO_SEED        = 0                     # seeds[] entry for an untouched primary slot
FIRST_SEED     = 1

ARRAY_DTYPE    = np.int32

# sanity cap on the per‑bucket seed search, override with SPH_MAX_SEED
MAX_SEED = min(int(os.getenv("SPH_MAX_SEED", str(1 << 20))), INT32_MAX)
