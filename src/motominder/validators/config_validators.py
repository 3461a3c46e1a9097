"""
Normalizers and checks used by the Settings field validators.
"""


def to_uppercase(value: str | None) -> str | None:
    """Upper-case a string setting (e.g. LOG_LEVEL=debug -> DEBUG); None passes through."""
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """Lower-case a string setting (e.g. LOG_FORMAT=JSON -> json); None passes through."""
    if value is None:
        return None
    return value.strip().lower()


def ensure_non_negative(value: int, name: str) -> int:
    """
    Reject negative identifiers such as TENANT_ID.

    Raises:
        ValueError: surfaced by pydantic as a ValidationError on the field.
    """
    if value < 0:
        raise ValueError(f"{name} cannot be a negative value.")
    return value
