"""Tests for field validation rules."""
import pytest

from account_platform.account_platform.account_service.errors import ValidationError, summarize
from account_platform.account_platform.account_service.validation import (
    FieldError,
    clean_password,
    clean_text,
    group_errors,
    is_blank,
    validate_login,
    validate_registration,
)


def test_valid_registration_has_no_errors():
    assert validate_registration("Robi", "robi@example.com", "pw12345", "pw12345") == []


def test_each_field_reports_only_its_first_failure():
    errors = validate_registration(None, 42, None, None)
    assert errors == [
        FieldError("name", "The name field is required."),
        FieldError("email", "The email field must be a string."),
        FieldError("password", "The password field is required."),
    ]


def test_non_string_password_is_rejected():
    errors = validate_registration("Robi", "robi@example.com", ["pw"], ["pw"])
    assert errors == [FieldError("password", "The password field must be a string.")]


def test_login_rules():
    assert validate_login("robi@example.com", "x") == []
    assert validate_login(None, None) == [
        FieldError("email", "The email field is required."),
        FieldError("password", "The password field is required."),
    ]
    assert validate_login("robi@", "x") == [
        FieldError("email", "The email field must be a valid email address."),
    ]


@pytest.mark.parametrize("value, blank", [
    (None, True),
    ("", True),
    ("   ", True),
    ([], True),
    ("a", False),
    (0, False),
    (False, False),
])
def test_is_blank(value, blank):
    assert is_blank(value) is blank


def test_clean_text_trims_and_nulls_blank():
    assert clean_text("  Robi  ") == "Robi"
    assert clean_text("   ") is None
    assert clean_text(5) == 5


def test_clean_password_keeps_whitespace_and_stringifies_numbers():
    assert clean_password("  secret ") == "  secret "
    assert clean_password(12345678) == "12345678"
    assert clean_password(True) is True


def test_whitespace_only_password_is_required_error():
    errors = validate_registration("Robi", "robi@example.com", "   ", "   ")
    assert errors == [FieldError("password", "The password field is required.")]


def test_group_errors_and_summary():
    grouped = group_errors([
        FieldError("name", "The name field is required."),
        FieldError("email", "The email field is required."),
        FieldError("email", "The email has already been taken."),
    ])
    assert grouped == {
        "name": ["The name field is required."],
        "email": ["The email field is required.", "The email has already been taken."],
    }
    assert summarize(grouped) == "The name field is required. (and 2 more errors)"
    assert summarize({"name": ["a"], "email": ["b"]}) == "a (and 1 more error)"
    assert ValidationError({"name": ["only"]}).message == "only"


@pytest.mark.parametrize("address", [
    "robi@app.test",
    "dev@company.local",
    "robi@localhost",
    "a@b",
])
def test_reserved_and_dotless_domains_are_valid_emails(address):
    assert validate_registration("Robi", address, "pw12345", "pw12345") == []
    assert validate_login(address, "pw12345") == []


@pytest.mark.parametrize("address", ["robi", "robi@", "@example.com", "ro bi@example.com"])
def test_malformed_emails_are_still_rejected(address):
    assert validate_login(address, "pw12345") == [
        FieldError("email", "The email field must be a valid email address."),
    ]
