"""User Input Enforcement — pure validation rules.

Invariants:
    - Ids must be positive integers within signed 64-bit range (bool rejected)
    - name and email must be non-empty after strip; name checked first
"""

import pytest

from user_service.core.enforce_user_input import (
    MAX_USER_ID, check_required_text, check_user_id, validate_create_fields,
)
from user_service.core.errors import UserValidationError


@pytest.mark.parametrize("user_id", [1, 2, 10_000, MAX_USER_ID])
def test_positive_ids_pass(user_id):
    assert check_user_id(user_id) is None


@pytest.mark.parametrize("user_id", [0, -1, True, "1", 1.5, None, MAX_USER_ID + 1, 2**70])
def test_invalid_ids_rejected(user_id):
    error = check_user_id(user_id)
    assert isinstance(error, UserValidationError)
    assert error.field == "id"
    assert error.http_status == 400


@pytest.mark.parametrize("value", ["", "   ", None])
def test_required_text_rejects_blank(value):
    error = check_required_text(value, "name")
    assert error is not None
    assert error.message == "name is required"


def test_create_fields_ok():
    assert validate_create_fields("Ann", "ann@x.com") is None


def test_create_fields_name_checked_first():
    error = validate_create_fields("", "")
    assert error.field == "name"


def test_create_fields_missing_email():
    error = validate_create_fields("Ann", " ")
    assert error.field == "email"
