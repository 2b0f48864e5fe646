"""Environment context builder — launcher and mod list, derived once per log."""

from __future__ import annotations

import logging
from itertools import zip_longest
from typing import Iterable, Mapping

import re2

from .models import EnvironmentContext, Launcher, ModMetadata

logger = logging.getLogger(__name__)

# First marker in this order wins
LAUNCHER_MARKERS: tuple[tuple[Launcher, str], ...] = (
    (Launcher.POLYMC, "PolyMC version:"),
    (Launcher.PRISM, "Prism Launcher version:"),
    (Launcher.MULTIMC, "MultiMC version:"),
)

# Fabric / Quilt:
#   [main/INFO]: Loading 63 mods:
#   	- fabric-api 0.76.0+1.19.2
#   	   |-- fabric-api-base 0.4.23
#   	   \-- fabric-command-api-v2 2.2.1
_RE_FABRIC_BLOCK = re2.compile(r"Loading \d+ mods:\n((?:[ \t]+\S.*(?:\n|$))+)")
_RE_FABRIC_ENTRY = re2.compile(r"(?m)^[ \t]+(?:-|\|--|\\--)[ \t]+([A-Za-z0-9_.\-]+)[ \t]+(\S+)")

# Forge: "Found valid mod file journeymap.jar with {journeymap} mods - versions {5.8.0}"
# Jars bundling several mods list them comma-separated: "with {a,b} mods - versions {1.0,2.0}"
_RE_FORGE_ENTRY = re2.compile(
    r"Found valid mod file \S+ with \{([^}\n]*)\} mods - versions \{([^}\n]*)\}"
)


def detect_launcher(text: str) -> Launcher | None:
    """Return the launcher whose header marker appears in the log, or None if unknown."""
    for launcher, marker in LAUNCHER_MARKERS:
        if marker in text:
            return launcher
    return None


def _split_braced(value: str) -> list[str]:
    return [part.strip() for part in value.split(",")]


def parse_mods(text: str) -> dict[str, ModMetadata]:
    """Collect installed mods from Fabric/Quilt mod listings and Forge discovery lines."""
    mods: dict[str, ModMetadata] = {}
    for block in _RE_FABRIC_BLOCK.finditer(text):
        for entry in _RE_FABRIC_ENTRY.finditer(block.group(1)):
            key = entry.group(1).lower()
            mods.setdefault(key, ModMetadata(mod_id=key, version=entry.group(2)))
    for entry in _RE_FORGE_ENTRY.finditer(text):
        ids = _split_braced(entry.group(1))
        versions = _split_braced(entry.group(2))
        for mod_id, ver in zip_longest(ids, versions[: len(ids)]):
            if not mod_id:
                continue
            key = mod_id.lower()
            mods.setdefault(key, ModMetadata(mod_id=key, version=ver or None))
    return mods


def _normalize_mods(mods: Mapping | Iterable[str]) -> dict[str, ModMetadata]:
    """Accept {id: ModMetadata | version | None} or a plain list of ids."""
    out: dict[str, ModMetadata] = {}
    if isinstance(mods, Mapping):
        for mod_id, meta in mods.items():
            key = str(mod_id).lower()
            if isinstance(meta, ModMetadata):
                out[key] = meta
            else:
                out[key] = ModMetadata(mod_id=key, version=None if meta is None else str(meta))
        return out
    for mod_id in mods:
        key = str(mod_id).lower()
        out[key] = ModMetadata(mod_id=key)
    return out


def build_context(
    text: str,
    mods: Mapping | Iterable[str] | None = None,
    launcher: Launcher | None = None,
) -> EnvironmentContext:
    """
    Derive the context every rule sees.
    An externally supplied mod listing replaces parsing; an explicit launcher overrides detection.
    """
    known = _normalize_mods(mods) if mods is not None else parse_mods(text)
    detected = launcher if launcher is not None else detect_launcher(text)
    logger.debug(
        "Context: launcher=%s, %d known mod(s)",
        detected.value if detected else "unknown",
        len(known),
    )
    return EnvironmentContext(launcher=detected, known_mods=known)
