"""Domain Types — backend parsing and cache key layout."""

import pytest

from user_service.core.domain_types import (
    ALL_USERS_KEY, StorageBackend, user_cache_key,
)


@pytest.mark.parametrize("raw, expected", [
    ("postgres", StorageBackend.POSTGRES),
    ("mongodb", StorageBackend.MONGODB),
    ("memory", StorageBackend.MEMORY),
    ("auto", StorageBackend.AUTO),
    (" Postgres ", StorageBackend.POSTGRES),
    ("", StorageBackend.AUTO),
    (None, StorageBackend.AUTO),
    ("mysql", StorageBackend.AUTO),
])
def test_parse_backend(raw, expected):
    assert StorageBackend.parse(raw) == expected


def test_cache_keys():
    assert user_cache_key(42) == "user:42"
    assert ALL_USERS_KEY == "users:all"
