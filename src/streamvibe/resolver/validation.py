"""User key checks."""

import re

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_user_key(user_key: str | None) -> bool:
    """Whether ``user_key`` looks like an email address."""
    if not user_key:
        return False
    return _EMAIL_RE.fullmatch(user_key.strip()) is not None
