from .builder import build
from .errors import (ConstructionError, DuplicateKeyError, EmptyTableError,
                     FreeSlotsExhausted, HashCollisionError, InvalidTableError,
                     SeedSearchExhausted, StaticPerfectHashError)
from .table import Direct, Seeded, Table, Unassigned

__all__ = [
    "build", "Table", "Seeded", "Direct", "Unassigned",
    "StaticPerfectHashError", "ConstructionError", "SeedSearchExhausted",
    "FreeSlotsExhausted", "HashCollisionError", "DuplicateKeyError",
    "EmptyTableError", "InvalidTableError",
]
