from __future__ import annotations

from dataclasses import dataclass, field

"""CourseEntry domain model: one validated participant row.

Ordering and equality are defined on (name, id) only: two entries with the
same name and id are interchangeable for sorting and deduplication even if
their other fields differ.
"""

__all__ = [
    "Price",
    "Auxiliaries",
    "ExtraFields",
    "CourseEntry",
]


@dataclass(frozen=True)
class Price:
    """Single optional price/balance value (show-price mode)."""
    value: float | None = None


@dataclass(frozen=True)
class Auxiliaries:
    """Ordered (label, value) pairs copied from configured columns."""
    values: tuple[tuple[str, str], ...] = ()


ExtraFields = Price | Auxiliaries


@dataclass(frozen=True, order=True)
class CourseEntry:
    """Participant record extracted from one sheet row.

    Field order matters: dataclass ordering compares name first, then id.
    """
    name: str
    id: int
    group: str = field(compare=False)
    telephone: str = field(compare=False)
    email: str = field(compare=False)
    extra: ExtraFields = field(default_factory=Auxiliaries, compare=False)
