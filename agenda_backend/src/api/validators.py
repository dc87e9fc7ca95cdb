"""
Argument checks run by every service operation before the store is touched.
"""

from datetime import date

from email_validator import EmailNotValidError, validate_email as parse_email

from src.api.errors import InvalidField


def validate_non_empty_string(label: str, value) -> None:
    """Raise InvalidField(label) unless value is a non-empty str."""
    if not isinstance(value, str) or not value:
        raise InvalidField(label)


def validate_email(value, label: str = "email") -> None:
    """Raise InvalidField unless value is a plain address like ``local@domain.tld``.

    Reserved names other than ``.test`` (``.local``, ``.localhost``,
    ``.invalid``, ``.onion``, ``.arpa``) are refused by email-validator.
    """
    if not isinstance(value, str) or not value:
        raise InvalidField(label)
    try:
        parsed = parse_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        raise InvalidField(label)
    # test_environment also lets a bare "@test" through
    if "." not in parsed.domain or parsed.normalized.lower() != value.lower():
        raise InvalidField(label)


def validate_date(label: str, value) -> None:
    """Raise InvalidField(label) unless value is a date or datetime object."""
    if not isinstance(value, date):
        raise InvalidField(label)
