from datetime import date, datetime

import pytest

from src.api.errors import ErrorKind, InvalidField
from src.api.validators import validate_date, validate_email, validate_non_empty_string


@pytest.mark.parametrize("value", ["x", "password", " "])
def test_non_empty_string_accepts_strings(value):
    validate_non_empty_string("name", value)


@pytest.mark.parametrize("value", [None, "", 123, 1.5, ["a"], b"bytes"])
def test_non_empty_string_rejects_other_values(value):
    with pytest.raises(InvalidField) as excinfo:
        validate_non_empty_string("name", value)
    assert str(excinfo.value) == "invalid name"
    assert excinfo.value.kind is ErrorKind.INVALID_FIELD
    assert excinfo.value.label == "name"


@pytest.mark.parametrize(
    "value", ["a@mail.com", "maider-0.42@mail.com", "first.last@sub.mail.org", "a@mail.test", "A@MAIL.COM"]
)
def test_email_accepts_conventional_addresses(value):
    validate_email(value)


@pytest.mark.parametrize(
    "value",
    [
        None, "", 123, "plainaddress", "a@mail", "@mail.com", "a@@mail.com", "a b@mail.com",
        "John <a@mail.com>", "a@test", " a@mail.com",
    ],
)
def test_email_rejects_malformed_values(value):
    with pytest.raises(InvalidField, match="^invalid email$"):
        validate_email(value)


@pytest.mark.parametrize("value", ["x@foo.local", "x@host.localhost", "x@foo.invalid"])
def test_email_rejects_reserved_domains(value):
    with pytest.raises(InvalidField, match="^invalid email$"):
        validate_email(value)


def test_date_accepts_date_and_datetime():
    validate_date("date", datetime(2026, 10, 18, 9, 30))
    validate_date("date", date(2026, 10, 18))


@pytest.mark.parametrize("value", [None, "", "2026-10-18", 1760000000, 1.5])
def test_date_rejects_strings_and_numbers(value):
    with pytest.raises(InvalidField, match="^invalid date$"):
        validate_date("date", value)
