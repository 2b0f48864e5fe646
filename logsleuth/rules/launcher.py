"""Launcher advisories — driven by the detected launcher only, the text is ignored."""

from ..models import EnvironmentContext, Launcher
from .base import CheckReport, Severity


def check_polymc(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    if ctx.launcher != Launcher.POLYMC:
        return None
    return CheckReport(
        rule_id="polymc_launcher",
        title="PolyMC Detected",
        description=(
            "PolyMC is an outdated launcher. Consider switching to "
            "[Prism Launcher](https://prismlauncher.org/), a fork with more features and better support."
        ),
        severity=Severity.MEDIUM,
    )


CHECKS = [
    check_polymc,
]
