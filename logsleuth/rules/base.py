"""Base types for rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from ..models import EnvironmentContext


class Severity(str, Enum):
    NONE = "NONE"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @property
    def color(self) -> int:
        """24-bit presentation color, e.g. for chat embeds."""
        return _COLORS[self]

    @classmethod
    def parse(cls, name: str) -> "Severity":
        """Case-insensitive lookup: 'high' -> Severity.HIGH."""
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ValueError(
                f"Unknown severity {name!r} (expected one of: {', '.join(s.value for s in cls)})"
            ) from None

    # Ordering is by rank, not by the string value
    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_RANK = {
    Severity.NONE: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
}

_COLORS = {
    Severity.NONE: 0x219EBC,
    Severity.MEDIUM: 0xF77F00,
    Severity.HIGH: 0xD62828,
}


@dataclass(frozen=True)
class CheckReport:
    """Output of a single rule check."""

    title: str
    description: str  # Markdown; may embed captured values and links
    severity: Severity
    rule_id: str = ""


Rule = Callable[[str, "EnvironmentContext"], Optional[CheckReport]]
