"""Alias generation utilities."""

import secrets
import string
from typing import Callable

# URL-safe characters (excluding ambiguous chars)
URL_ALPHABET = "".join(
    c for c in string.ascii_letters + string.digits
    if c not in "0O1lI"
)


def generate_alias(length: int = 7) -> str:
    """Generate a random short URL alias.

    Args:
        length: Length of the alias (default 7).

    Returns:
        Random alphanumeric string.
    """
    return "".join(secrets.choice(URL_ALPHABET) for _ in range(length))


def generate_unique_alias(
    is_taken: Callable[[str], bool],
    length: int = 7,
    attempts: int = 10,
) -> str | None:
    """Generate an alias that ``is_taken`` reports as free.

    Returns:
        The alias, or None if every attempt collided.
    """
    for _ in range(attempts):
        alias = generate_alias(length)
        if not is_taken(alias):
            return alias
    return None
