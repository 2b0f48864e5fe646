"""Rules about specific mods — found in the mod list, in the text, or both."""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab

OPTIFABRIC_PATTERNS = (
    r"Mod '.+' \(\S+\) \S+ is incompatible with any version of mod '.+' \(optifabric\)",
    r"me\.modmuss50\.optifabric",
)

INDIUM_PATTERN = (
    r'because the return value of "net\.fabricmc\.fabric\.api\.renderer\.v1\.RendererAccess\.getRenderer\(\)" is null'
)


def check_optifabric(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    """Installed per the mod list, or visible in the log. Either is enough."""
    in_mod_list = ctx.has_mod("optifabric")
    in_text = grab(log, *OPTIFABRIC_PATTERNS) is not None
    if not (in_mod_list or in_text):
        return None
    return CheckReport(
        rule_id="optifabric",
        title="OptiFabric detected",
        description=(
            "Optifine is known to cause problems with many mods on Fabric. If you're having strange "
            "issues or crashes, consider replacing it with some of the many available "
            "[alternatives](https://lambdaurora.dev/optifine_alternatives/)."
        ),
        severity=Severity.HIGH,
    )


def check_bclib(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    if not ctx.has_mod("bclib"):
        return None
    return CheckReport(
        rule_id="bclib",
        title="BCLib detected",
        description=(
            "BCLib is known to cause issues with some mods. If you're experiencing crashes or other "
            "problems, consider trying without it."
        ),
        severity=Severity.MEDIUM,
    )


def check_indium(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    """Fabric Rendering API call returned null — Sodium without Indium."""
    if grab(log, INDIUM_PATTERN) is None:
        return None
    return CheckReport(
        rule_id="missing_indium",
        title="Missing Indium",
        description=(
            "A mod is trying to make use of Fabric Rendering API, which may be missing when rendering "
            "mods such as Sodium are loaded. If you use Sodium, install "
            "[Indium](https://modrinth.com/mod/indium) to resolve this."
        ),
        severity=Severity.HIGH,
    )


CHECKS = [
    check_optifabric,
    check_bclib,
    check_indium,
]
