"""Rule: a mod requires another mod that is not installed."""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab_all

# Fabric Loader wording varies with the version constraint; all three mean the same thing.
# The dependent's version token is absent in some loader builds.
PATTERNS = (
    r"Mod '(.+)' \(\S+\) (?:\S+ )?requires any version between \S+ and \S+ of (.+), which is missing!",
    r"Mod '(.+)' \(\S+\) (?:\S+ )?requires version \S+ or later of (.+), which is missing!",
    r"Mod '(.+)' \(\S+\) (?:\S+ )?requires any version of (.+), which is missing!",
)


def check(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    captures = grab_all(log, *PATTERNS)
    if captures is None:
        return None

    dependent = captures.group(1)
    dependency = captures.group(2)
    return CheckReport(
        rule_id="missing_dependency",
        title="Missing dependency",
        description=f"The `{dependent}` mod needs `{dependency}` to be installed, but it is missing.",
        severity=Severity.HIGH,
    )
