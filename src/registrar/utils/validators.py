"""Field validation helpers.

These checks are advisory: a failing email or phone produces a warning in
the audit log, the record is still stored.

Functions:
- validate_email(email) -> bool: exactly one "@" and at least one "."
- validate_phone(phone) -> bool: 10+ characters of digits, "-" or spaces
"""

PHONE_MIN_LENGTH = 10
PHONE_ALLOWED_SEPARATORS = {"-", " "}


def validate_email(email: str) -> bool:
    """Loose email shape check.

    Args:
        email: Email address to check

    Returns:
        True if the address has exactly one "@" and at least one "."
    """
    return email.count("@") == 1 and "." in email


def validate_phone(phone: str) -> bool:
    """Loose phone shape check.

    Args:
        phone: Phone number to check

    Returns:
        True if at least 10 characters long and made only of digits,
        hyphens and spaces
    """
    if len(phone) < PHONE_MIN_LENGTH:
        return False
    return all(c.isdigit() or c in PHONE_ALLOWED_SEPARATORS for c in phone)
