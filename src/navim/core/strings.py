# =============================================================================
# String Helpers
# =============================================================================
# Small text utilities shared by the renderer and the UI.
# =============================================================================

import unicodedata


def truncate_string(text: str, max_chars: int) -> str:
    """
    Truncate text to max_chars characters, appending "..." when cut.

    Example:
        >>> truncate_string("abcdef", 3)
        'abc...'
    """
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}..."


def sanitize_display(text: str) -> str:
    """
    Remove control characters (except newline) and surrounding whitespace.

    Tabs are expanded first so indentation inside code blocks survives.
    """
    text = text.expandtabs(4)
    cleaned = "".join(
        ch for ch in text
        if ch == "\n" or unicodedata.category(ch) != "Cc"
    )
    return cleaned.strip()
