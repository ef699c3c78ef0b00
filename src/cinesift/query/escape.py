"""Escaper — Backslash-escapes RediSearch metacharacters in literal tokens."""

from __future__ import annotations

# The backslash must come first: later replacements insert backslashes
# that must not be escaped again.
META_CHARACTERS: tuple[str, ...] = (
    "\\", "^", "$", "{", "}", "[", "]", "(", ")", ".",
    "*", "+", "?", "|", "<", ">", "-", "&", "%",
)  # fmt: skip


def escape(token: str) -> str:
    """Escape every reserved metacharacter in ``token`` with a backslash.

    Escaping is not idempotent: escaping an already escaped token escapes
    the inserted backslashes as well.

    Example:
        >>> escape("a-b{c}")
        'a\\\\-b\\\\{c\\\\}'
    """
    for char in META_CHARACTERS:
        if char in token:
            token = token.replace(char, "\\" + char)
    return token
