"""Rule engine — runs the catalogue against one log and collects the reports."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping

from .environment import build_context
from .models import EnvironmentContext, Launcher
from .rules.base import CheckReport, Rule, Severity
from .rules.matcher import CaptureError
from .rules import (
    crash_report,
    dependency,
    mixin,
    java_version,
    missing_field,
    launcher,
    known_mods,
)

logger = logging.getLogger(__name__)

# Evaluation order, which is also report order. Every rule always runs.
CHECKS: tuple[Rule, ...] = (
    crash_report.check,
    dependency.check,
    mixin.check,
    java_version.check,
    missing_field.check,
    *launcher.CHECKS,
    *known_mods.CHECKS,
)


def run_rules(log: str, ctx: EnvironmentContext) -> list[CheckReport]:
    """Run every rule once, in catalogue order, and return the reports that fire."""
    results: list[CheckReport] = []
    for check_fn in CHECKS:
        name = f"{check_fn.__module__}.{check_fn.__name__}"
        try:
            r = check_fn(log, ctx)
        except CaptureError:
            logger.exception("Rule %s matched without its expected capture group; skipped", name)
            continue
        except Exception:
            logger.exception("Rule %s failed; skipped", name)
            continue
        if r is not None:
            logger.debug("Rule %s fired: %s", name, r.title)
            results.append(r)
    return results


def diagnose(
    log: str,
    mods: Mapping | Iterable[str] | None = None,
    launcher: Launcher | None = None,
) -> list[CheckReport]:
    """Build the environment context for this log, then run the catalogue."""
    ctx = build_context(log, mods=mods, launcher=launcher)
    return run_rules(log, ctx)


def diagnose_batch(
    sources: Iterable[tuple[str, str]],
    max_workers: int = 4,
    mods: Mapping | Iterable[str] | None = None,
    launcher: Launcher | None = None,
) -> list[tuple[str, list[CheckReport]]]:
    """
    Diagnose several (source_name, text) pairs concurrently.
    Runs are independent; output keeps input order.
    """
    sources = list(sources)
    if not sources:
        return []
    if mods is not None and not isinstance(mods, Mapping):
        mods = list(mods)  # shared by every run
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = [
            (name, pool.submit(diagnose, text, mods, launcher))
            for name, text in sources
        ]
        return [(name, f.result()) for name, f in futures]


def highest_severity(reports: Iterable[CheckReport]) -> Severity | None:
    """Most severe level among reports, None if there are none."""
    return max((r.severity for r in reports), default=None)
