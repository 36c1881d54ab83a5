"""Exception hierarchy for static_perfect_hash."""


class StaticPerfectHashError(Exception):
    """Base exception for all static_perfect_hash errors."""


class ConstructionError(StaticPerfectHashError, RuntimeError):
    """No valid table could be produced for the key set."""


class SeedSearchExhausted(ConstructionError):
    """A bucket found no collision-free seed below the sanity cap."""

    def __init__(self, slot: int, members: int, max_seed: int):
        super().__init__(
            f"no seed <= {max_seed} places the {members} keys of bucket {slot}")
        self.slot = slot
        self.members = members
        self.max_seed = max_seed


class FreeSlotsExhausted(ConstructionError):
    """The displacement phase ran out of free slots."""

    def __init__(self, remaining: int):
        super().__init__(f"free list empty with {remaining} singleton buckets left")
        self.remaining = remaining


class HashCollisionError(ConstructionError):
    """Two keys of one bucket share the full 64-bit hash."""

    def __init__(self, slot: int, hash_value: int):
        super().__init__(f"bucket {slot} holds keys with identical hash {hash_value:#018x}")
        self.slot = slot
        self.hash_value = hash_value


class DuplicateKeyError(StaticPerfectHashError, ValueError):
    """The key sequence contains the same key twice."""

    def __init__(self, key: str, first: int, second: int):
        super().__init__(f"duplicate key {key!r} at positions {first} and {second}")
        self.key = key
        self.first = first
        self.second = second


class EmptyTableError(StaticPerfectHashError, LookupError):
    """Query against a table built from zero keys."""


class InvalidTableError(StaticPerfectHashError, ValueError):
    """Arrays that cannot form a table."""
