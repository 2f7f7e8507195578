import re

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: str | None) -> bool:
    """Permissive syntactic check: something@something.something, no whitespace."""
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def normalize_email(email: str) -> str:
    """Canonical form used as the rate-limiter key."""
    return email.strip().lower()


def missing_fields(**fields: str | None) -> list[str]:
    """Return the names of fields that are None or blank after trimming."""
    return [
        name
        for name, value in fields.items()
        if value is None or not str(value).strip()
    ]
