"""Pattern matching over the full log text.

A rule hands over one or more alternative patterns describing the same
failure (e.g. different wordings across loader versions). They are tried in
declared order and the first one that matches wins; the caller gets a single
optional set of captures back and never learns which alternative it was.

Patterns are compiled with RE2, so a search is linear in the length of the
text whatever the text contains.
"""

from __future__ import annotations

from functools import lru_cache

import re2


class CaptureError(LookupError):
    """A pattern matched but an expected capture group is absent.

    This is a defect in the rule's own pattern, never a property of the log.
    """

    def __init__(self, pattern: str, index: int):
        self.pattern = pattern
        self.index = index
        super().__init__(f"group {index} did not participate in match of {pattern!r}")


@lru_cache(maxsize=None)
def compile_pattern(pattern: str):
    return re2.compile(pattern)


class Captures:
    """Capture groups of a successful match (1-indexed)."""

    __slots__ = ("pattern", "_groups", "_text")

    def __init__(self, pattern: str, match):
        self.pattern = pattern
        self._groups = match.groups()
        self._text = match.group(0)

    @property
    def text(self) -> str:
        """The whole matched text."""
        return self._text

    def __len__(self) -> int:
        return len(self._groups)

    def group(self, index: int) -> str:
        if index < 1 or index > len(self._groups):
            raise CaptureError(self.pattern, index)
        value = self._groups[index - 1]
        if value is None:
            raise CaptureError(self.pattern, index)
        return value

    def __getitem__(self, index: int) -> str:
        return self.group(index)

    def __repr__(self) -> str:
        return f"Captures({self._groups!r})"


def grab_all(text: str, *patterns: str) -> Captures | None:
    """Return captures of the first pattern (in declared order) that matches."""
    for pattern in patterns:
        m = compile_pattern(pattern).search(text)
        if m is not None:
            return Captures(pattern, m)
    return None


def grab(text: str, *patterns: str) -> str | None:
    """Like grab_all, but return group 1 (or the whole match if the pattern has no groups)."""
    captures = grab_all(text, *patterns)
    if captures is None:
        return None
    if not len(captures):
        return captures.text
    return captures.group(1)
