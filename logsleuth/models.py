"""Read-only facts about where a log came from."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Launcher(str, Enum):
    """Launchers recognized from their log header."""

    POLYMC = "polymc"
    PRISM = "prism"
    MULTIMC = "multimc"


@dataclass(frozen=True)
class ModMetadata:
    """One installed mod. Rules only look mods up by id."""

    mod_id: str  # lowercase, e.g. "fabric-api"
    version: Optional[str] = None


@dataclass(frozen=True)
class EnvironmentContext:
    """Built once per evaluation and shared, unchanged, by every rule."""

    launcher: Optional[Launcher] = None  # None = unknown
    known_mods: Mapping[str, ModMetadata] = field(default_factory=dict)

    def __post_init__(self):
        # Wrap a private copy so neither rules nor the caller can mutate it mid-run
        object.__setattr__(self, "known_mods", MappingProxyType(dict(self.known_mods)))

    def has_mod(self, mod_id: str) -> bool:
        """Exact, case-sensitive lookup by mod id."""
        return mod_id in self.known_mods
