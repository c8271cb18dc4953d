"""Utility modules for URL shortener."""

from .alias import URL_ALPHABET, generate_alias, generate_unique_alias

__all__ = [
    "URL_ALPHABET",
    "generate_alias",
    "generate_unique_alias",
]
