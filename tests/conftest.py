"""Shared key sets."""

import pytest

SCENARIO_KEYS = ["foo", "bar", "baz", "qux", "zot", "frob", "zork", "zeek"]


@pytest.fixture
def scenario_keys():
    return list(SCENARIO_KEYS)


@pytest.fixture(scope="session")
def many_keys():
    return [f"key-{i:05d}" for i in range(3000)]
