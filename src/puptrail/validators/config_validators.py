from pathlib import Path


def upper_choice(value: str | None) -> str | None:
    """`" debug "` -> `"DEBUG"`; non-strings pass through for pydantic to reject."""
    if not isinstance(value, str):
        return value
    return value.strip().upper()


def lower_choice(value: str | None) -> str | None:
    if not isinstance(value, str):
        return value
    return value.strip().lower()


def expand_path(value: str | Path | None) -> Path | None:
    """
    Expand `~` and make the path absolute. None passes through so pydantic
    can report the missing value itself.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
    return Path(value).expanduser().resolve()
