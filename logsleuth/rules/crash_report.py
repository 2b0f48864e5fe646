"""Rule: summarize a vanilla crash report — description plus the proximate error."""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab_all


def check(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    captures = grab_all(
        log,
        r"---- Minecraft Crash Report ----\n// .+\n\nTime: .+\nDescription: (.+)\n\n(.+)\n",
    )
    if captures is None:
        return None

    description = captures.group(1)
    error = captures.group(2)
    return CheckReport(
        rule_id="crash_report_analysis",
        title="Crash report analysis",
        description=f"Context: `{description}`\n```\n{error}\n```",
        severity=Severity.NONE,
    )
