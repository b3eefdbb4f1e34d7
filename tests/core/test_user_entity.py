"""User Entity — immutability and partial merge."""

import dataclasses

import pytest

from user_service.core.user_entity import User, UserChanges


def test_user_is_frozen():
    user = User(id=1, name="Ann", email="ann@x.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        user.id = 2


def test_changes_skip_empty_fields():
    assert UserChanges(name="Annie").as_updates() == {"name": "Annie"}
    assert UserChanges(email="a@x.com").as_updates() == {"email": "a@x.com"}
    assert UserChanges().as_updates() == {}
    assert UserChanges().is_empty


def test_merged_name_only():
    user = User(id=1, name="Ann", email="ann@x.com")
    assert user.merged(UserChanges(name="Annie")) == User(1, "Annie", "ann@x.com")


def test_merged_email_only():
    user = User(id=1, name="Ann", email="ann@x.com")
    assert user.merged(UserChanges(email="a@y.org")) == User(1, "Ann", "a@y.org")


def test_merged_keeps_id_and_original():
    user = User(id=7, name="Ann", email="ann@x.com")
    merged = user.merged(UserChanges(name="B", email="b@x.com"))
    assert merged.id == 7
    assert user.name == "Ann"


def test_dict_round_trip():
    user = User(id=3, name="Ann", email="ann@x.com")
    assert User.from_dict(user.to_dict()) == user
