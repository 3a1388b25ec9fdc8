def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase (surrounding whitespace removed) if it's not None.
    """
    if value is None:
        return None
    return value.strip().upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase (surrounding whitespace removed) if it's not None.
    """
    if value is None:
        return None
    return value.strip().lower()
