import importlib
import logging

import numpy as np
import pytest

from static_perfect_hash import (DuplicateKeyError, EmptyTableError, FreeSlotsExhausted,
                                 HashCollisionError, SeedSearchExhausted, build, const)
from static_perfect_hash.buckets import Bucket, BucketEntry
from static_perfect_hash.builder import (Exhausted, Placement, place_seeded,
                                         place_singletons, search_seed)
from static_perfect_hash.hashing import seeded_slot


# ── build ────────────────────────────────────────────────────
def test_scenario_keys_resolve_to_own_index(scenario_keys):
    table = build(scenario_keys)
    assert table.size == 8
    assert [table.query(k) for k in scenario_keys] == list(range(8))
    assert sorted(table.values.tolist()) == list(range(8))


def test_single_key_uses_displacement():
    table = build(["only"])
    assert table.size == 1
    assert table.seeds.tolist() == [-1]
    assert table.values.tolist() == [0]
    assert table.query("only") == 0


@pytest.mark.parametrize("n", [1, 2, 3, 5, 16, 17, 100, 1000])
def test_bijection_and_sizing(n):
    keys = [f"k{i}" for i in range(n)]
    table = build(keys)
    assert len(table) == n
    assert table.size == 1 << (n - 1).bit_length()
    assert [table.query(k) for k in keys] == list(range(n))
    assert int(table.values.max()) < n


def test_large_set_needs_seeds_beyond_one(many_keys):
    table = build(many_keys)
    assert int(table.seeds.max()) > 1
    assert all(table.query(k) == i for i, k in enumerate(many_keys))


def test_deterministic(many_keys):
    a, b = build(many_keys), build(many_keys)
    assert np.array_equal(a.values, b.values)
    assert np.array_equal(a.seeds, b.seeds)


def test_empty_key_set():
    table = build([])
    assert table.size == 0
    assert len(table) == 0
    with pytest.raises(EmptyTableError):
        table.query("anything")


def test_duplicate_keys_rejected():
    with pytest.raises(DuplicateKeyError) as info:
        build(["a", "b", "a"])
    assert (info.value.key, info.value.first, info.value.second) == ("a", 0, 2)


def test_seed_cap_is_fatal(many_keys):
    with pytest.raises(SeedSearchExhausted) as info:
        build(many_keys, max_seed=1)
    assert info.value.max_seed == 1
    assert info.value.members >= 2


def test_build_logs_summary(scenario_keys, caplog):
    with caplog.at_level(logging.INFO, logger="static_perfect_hash.builder"):
        build(scenario_keys)
    assert "built table: 8 keys, size 8" in caplog.text


def test_max_seed_from_environment(monkeypatch):
    monkeypatch.setenv("SPH_MAX_SEED", "77")
    try:
        assert importlib.reload(const).MAX_SEED == 77
        monkeypatch.setenv("SPH_MAX_SEED", str(1 << 40))
        assert importlib.reload(const).MAX_SEED == const.INT32_MAX
    finally:
        monkeypatch.delenv("SPH_MAX_SEED")
        importlib.reload(const)


# ── seed search ──────────────────────────────────────────────
def _pair(size=8):
    # both hashes share primary slot 0
    return Bucket(0, [BucketEntry(1, size), BucketEntry(2, 2 * size)])


def test_search_retries_past_blocked_seed():
    bucket = _pair()
    claimed = [0] * 8
    blocked = seeded_slot(bucket.entries[0].hash, 1, 8)
    claimed[blocked] = 99

    result = search_seed(bucket, claimed, 8, 1000)
    assert isinstance(result, Placement)
    assert result.seed >= 2
    assert blocked not in result.slots
    assert len(set(result.slots)) == 2
    assert result.slots == tuple(seeded_slot(e.hash, result.seed, 8) for e in bucket.entries)


def test_search_reports_exhaustion():
    assert search_seed(_pair(2), [5, 5], 2, 10) == Exhausted(10)


def test_place_seeded_commits_values_and_seed():
    bucket = _pair()
    claimed, seeds = [0] * 8, [0] * 8
    rest = place_seeded([bucket, Bucket(3, [BucketEntry(3, 3)])], claimed, seeds, 8, 1000)

    assert [b.slot for b in rest] == [3]
    seed = seeds[0]
    assert seed >= 1
    for entry in bucket.entries:
        assert claimed[seeded_slot(entry.hash, seed, 8)] == entry.index


def test_place_seeded_rejects_identical_hashes():
    bucket = Bucket(2, [BucketEntry(1, 42), BucketEntry(2, 42)])
    with pytest.raises(HashCollisionError):
        place_seeded([bucket], [0] * 8, [0] * 8, 8, 1000)


def test_place_seeded_raises_when_cap_hit():
    with pytest.raises(SeedSearchExhausted) as info:
        place_seeded([_pair(2)], [5, 5], [0, 0], 2, 10)
    assert info.value.slot == 0


# ── displacement ─────────────────────────────────────────────
def test_singletons_fill_free_slots_in_order():
    claimed, seeds = [1, 0, 0, 2], [0] * 4
    place_singletons([Bucket(0, [BucketEntry(3, 0)]), Bucket(3, [BucketEntry(4, 3)])],
                     claimed, seeds)
    assert claimed == [1, 3, 4, 2]
    assert seeds == [-2, 0, 0, -3]


def test_singletons_fail_without_free_slot():
    with pytest.raises(FreeSlotsExhausted) as info:
        place_singletons([Bucket(0, [BucketEntry(1, 0)])], [7], [0])
    assert info.value.remaining == 1
