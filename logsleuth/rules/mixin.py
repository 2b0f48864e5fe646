"""Rule: mixin and entrypoint failures during mod loading.

The sub-checks are alternative symptoms of the same topic. They are tried in
order and only the first one that matches produces a report.
"""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab, grab_all

RULE_ID = "mixin_failure"

INJECTION_PATTERNS = (
    r"InvalidInjectionException: Critical injection failure: @Inject annotation on \S+ could not find any targets matching '.+' in \S+\. Using refmap \S+ \[PREINJECT Applicator Phase \-> \S+:(\w+) from mod (\w+)",
    r"InvalidAccessorException: No candidates were found matching \S+ in \S+ for \S+:(\w+) from mod (\w+)",
)

APPLY_ERROR_PATTERN = (
    r"MixinApplyError: Mixin \[\S+\.mixins\.json:\S+ from mod (\S+)\] from phase \[\S+\] in config \[\S+\.mixins\.json\] FAILED during \S+"
)

ENTRYPOINT_PATTERN = (
    r"RuntimeException: Could not execute entrypoint stage '\S+' due to errors, provided by '(\S+)'!"
)


def _check_injection(log: str) -> CheckReport | None:
    captures = grab_all(log, *INJECTION_PATTERNS)
    if captures is None:
        return None
    mixin = captures.group(1)
    mod_id = captures.group(2)
    return CheckReport(
        rule_id=RULE_ID,
        title="Mixin inject failed",
        description=(
            f"Mixin `{mixin}` from mod `{mod_id}` has failed. "
            f"It is possible that `{mod_id}` is not compatible with this Minecraft version, "
            "consider double-checking its version."
        ),
        severity=Severity.HIGH,
    )


def _check_apply_error(log: str) -> CheckReport | None:
    mod_id = grab(log, APPLY_ERROR_PATTERN)
    if mod_id is None:
        return None
    return CheckReport(
        rule_id=RULE_ID,
        title="Mixin error",
        description=(
            f"The mod `{mod_id}` has encountered a mixin error, this may be caused by a mismatch "
            "in Minecraft version or a mod incompatibility. Further investigation is required."
        ),
        severity=Severity.HIGH,
    )


def _check_entrypoint(log: str) -> CheckReport | None:
    mod_id = grab(log, ENTRYPOINT_PATTERN)
    if mod_id is None:
        return None
    return CheckReport(
        rule_id=RULE_ID,
        title="Entrypoint error",
        description=(
            f"The mod `{mod_id}` has encountered an error in its entrypoint, though it may not "
            "have caused it. Further investigation is required."
        ),
        severity=Severity.HIGH,
    )


SUB_CHECKS = (_check_injection, _check_apply_error, _check_entrypoint)


def check(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    for sub_check in SUB_CHECKS:
        r = sub_check(log)
        if r is not None:
            return r
    return None
