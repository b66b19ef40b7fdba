from __future__ import annotations

import string

from ..errors import InvalidColumnError

"""Spreadsheet column label <-> zero-based index conversion.

Labels are read permissively: any character that is not an ASCII letter is
dropped before conversion, so "A1" resolves like "A". Only a label that is
empty (before or after filtering) is rejected.
"""

__all__ = [
    "column_to_index",
    "index_to_column",
]

_ALPHABET = string.ascii_uppercase


def column_to_index(label: str) -> int:
    """Convert a column label such as "CY" to a zero-based index (102).

    Raises:
        InvalidColumnError: label is empty or contains no ASCII letters
    """
    if not label:
        raise InvalidColumnError("Column is empty")

    letters = [c for c in label.upper() if c in _ALPHABET]
    if not letters:
        raise InvalidColumnError(f"Column label contains no letters: {label!r}")

    acc = 0
    for letter in letters:
        acc = acc * 26 + _ALPHABET.index(letter) + 1
    # 1-based -> 0-based
    return acc - 1


def index_to_column(index: int) -> str:
    """Inverse of column_to_index, used for messages (102 -> "CY")."""
    if index < 0:
        raise InvalidColumnError(f"Column index must not be negative: {index}")
    label = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = _ALPHABET[rem] + label
    return label
