"""Rule: NoSuchFieldError, usually a client-only field stripped on the server."""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab


def check(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    if grab(log, r"java\.lang\.NoSuchFieldError") is None:
        return None
    return CheckReport(
        rule_id="missing_field",
        title="Field missing error",
        description=(
            "On the logical server some fields may be deleted by Fabric Loader when a mod defines "
            "them as client-only. Since this feature was broken before loader `0.15`, some mods may "
            "have implemented it incorrectly. See if there's an update for the mod in question, "
            "or try downgrading Fabric Loader."
        ),
        severity=Severity.HIGH,
    )
