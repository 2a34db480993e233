"""
Free-text entry helpers.
"""

from typing import Iterable, List, Optional


def clean_entry(value: Optional[str]) -> Optional[str]:
    """
    Trim a single list entry.

    Args:
        value: Raw text from the caller

    Returns:
        The trimmed text, or None when nothing but whitespace was given
    """
    if value is None:
        return None
    value = value.strip()
    return value or None


def clean_entries(values: Iterable[Optional[str]]) -> List[str]:
    """Trim every entry and drop the blank ones, keeping order."""
    cleaned = []
    for value in values:
        entry = clean_entry(value)
        if entry is not None:
            cleaned.append(entry)
    return cleaned


def matches_term(term: str, *fields: Optional[str]) -> bool:
    """Case-insensitive substring match against any non-empty field."""
    needle = term.lower()
    return any(field and needle in field.lower() for field in fields)
