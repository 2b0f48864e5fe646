"""Rule: the running Java is older than what Minecraft or a mod was compiled for."""

from ..models import EnvironmentContext
from .base import CheckReport, Severity
from .matcher import grab_all

# Class-file major version -> Java release: 49.0 is Java 5, each release adds one
CLASSFILE_JAVA_VERSIONS: dict[str, str] = {f"{44 + java}.0": str(java) for java in range(5, 26)}

DOWNLOAD_URL = "https://adoptium.net/temurin/releases/"

LAUNCHER_HINT_PATTERN = r"- Replace '.+' \(java\) ([0-9]+) with version ([0-9]+) or later\."

CLASS_VERSION_PATTERN = (
    r"UnsupportedClassVersionError: \S+ has been compiled by a more recent version of the Java Runtime "
    r"\(class file version (\S+)\), this version of the Java Runtime only recognizes class file versions up to (\S+)"
)


def java_for_classfile(classfile_version: str) -> str | None:
    """'61.0' -> '17'. None when the class-file version is outside the known table."""
    return CLASSFILE_JAVA_VERSIONS.get(classfile_version)


def _specific(need: str, has: str) -> str:
    return (
        f"A mod or Minecraft itself requires Java {need} to be used, but an older version, "
        f"Java {has} is being used instead. You may have to "
        f"[download]({DOWNLOAD_URL}?version={need}) a newer Java version and/or select it in your launcher."
    )


GENERIC_MESSAGE = (
    "A mod or Minecraft itself requires a different version of Java from the one that is available. "
    f"You may have to [download]({DOWNLOAD_URL}) a newer Java version and/or select it in your launcher."
)


def check(log: str, ctx: EnvironmentContext) -> CheckReport | None:
    captures = grab_all(log, LAUNCHER_HINT_PATTERN)
    if captures is not None:
        has = captures.group(1)
        need = captures.group(2)
        return CheckReport(
            rule_id="java_version_mismatch",
            title="Incorrect Java version",
            description=_specific(need, has),
            severity=Severity.HIGH,
        )

    captures = grab_all(log, CLASS_VERSION_PATTERN)
    if captures is not None:
        need = java_for_classfile(captures.group(1))
        has = java_for_classfile(captures.group(2))
        # Unknown class-file versions still mean the wrong Java; fall back to the generic text
        description = _specific(need, has) if need and has else GENERIC_MESSAGE
        return CheckReport(
            rule_id="java_version_mismatch",
            title="Incorrect Java version",
            description=description,
            severity=Severity.HIGH,
        )
    return None
