"""Small parity checks on integers."""

from __future__ import annotations


def odd(number: int) -> bool:
    """Return True if ``number`` is odd, negative numbers included."""
    return number % 2 != 0


def even(number: int) -> bool:
    """Return True if ``number`` is even."""
    return not odd(number)