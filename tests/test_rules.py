"""Tests for the individual rules."""

import pytest

from logsleuth.engine import CHECKS
from logsleuth.models import EnvironmentContext, Launcher, ModMetadata
from logsleuth.rules.base import Severity
from logsleuth.rules.crash_report import check as check_crash_report
from logsleuth.rules.dependency import check as check_dependency
from logsleuth.rules.java_version import (
    CLASSFILE_JAVA_VERSIONS,
    GENERIC_MESSAGE,
    check as check_java,
    java_for_classfile,
)
from logsleuth.rules.known_mods import check_bclib, check_indium, check_optifabric
from logsleuth.rules.launcher import check_polymc
from logsleuth.rules.missing_field import check as check_missing_field
from logsleuth.rules.mixin import check as check_mixin
from logsleuth.rules.registry import RULE_INFO


def _make_ctx(launcher=None, mods=()) -> EnvironmentContext:
    return EnvironmentContext(
        launcher=launcher,
        known_mods={m: ModMetadata(mod_id=m) for m in mods},
    )


CRASH_REPORT = (
    "---- Minecraft Crash Report ----\n"
    "// Who set us up the TNT?\n"
    "\n"
    "Time: 2024-01-01 12:00:00\n"
    "Description: Initializing game\n"
    "\n"
    "java.lang.IllegalStateException: Something broke\n"
    "\tat net.minecraft.client.Main.main(Main.java:1)\n"
)

INJECTION = (
    "org.spongepowered.asm.mixin.injection.throwables.InvalidInjectionException: Critical injection "
    "failure: @Inject annotation on onTick could not find any targets matching 'tick()V' in "
    "net.minecraft.class_310. Using refmap examplemod-refmap.json [PREINJECT Applicator Phase -> "
    "examplemod.mixins.json:MinecraftClientMixin from mod examplemod] -> Prepare Injections"
)

ACCESSOR = (
    "org.spongepowered.asm.mixin.gen.throwables.InvalidAccessorException: No candidates were found "
    "matching field_1234 in net.minecraft.class_1297 for otherfix.mixins.json:EntityAccessor from mod otherfix"
)

APPLY_ERROR = (
    "org.spongepowered.asm.mixin.transformer.throwables.MixinApplyError: Mixin "
    "[coolmod.mixins.json:WorldMixin from mod coolmod] from phase [DEFAULT] in config "
    "[coolmod.mixins.json] FAILED during APPLY"
)

ENTRYPOINT = (
    "java.lang.RuntimeException: Could not execute entrypoint stage 'main' due to errors, "
    "provided by 'badmod'!"
)

CLASS_VERSION = (
    "java.lang.UnsupportedClassVersionError: net/example/Mod has been compiled by a more recent "
    "version of the Java Runtime (class file version {need}), this version of the Java Runtime only "
    "recognizes class file versions up to {has}"
)

INDIUM = (
    'java.lang.NullPointerException: Cannot invoke "net.fabricmc.fabric.api.renderer.v1.Renderer.meshBuilder()" '
    'because the return value of "net.fabricmc.fabric.api.renderer.v1.RendererAccess.getRenderer()" is null'
)


def test_crash_report_extracts_description_and_error():
    """Crash report summary quotes the description and first error line."""
    r = check_crash_report(CRASH_REPORT, _make_ctx())
    assert r is not None
    assert r.title == "Crash report analysis"
    assert r.severity == Severity.NONE
    assert "`Initializing game`" in r.description
    assert "```\njava.lang.IllegalStateException: Something broke\n```" in r.description


def test_crash_report_needs_full_template():
    """Header alone is not a crash report summary."""
    assert check_crash_report("---- Minecraft Crash Report ----\nnothing else", _make_ctx()) is None


def test_missing_dependency_any_version():
    """Dependency rule fires HIGH and names both mods."""
    log = "Mod 'Foo' (foo) requires any version of Bar Lib, which is missing!"
    r = check_dependency(log, _make_ctx())
    assert r is not None
    assert r.title == "Missing dependency"
    assert r.severity == Severity.HIGH
    assert "`Foo`" in r.description
    assert "`Bar Lib`" in r.description


@pytest.mark.parametrize("line", [
    "- Mod 'Fabric API' (fabric-api) 0.92.0 requires any version between 1.0 and 2.0 of Cloth Config, which is missing!",
    "- Mod 'Fabric API' (fabric-api) 0.92.0 requires version 1.5 or later of Cloth Config, which is missing!",
    "- Mod 'Fabric API' (fabric-api) 0.92.0 requires any version of Cloth Config, which is missing!",
])
def test_missing_dependency_wordings(line):
    """All three loader wordings map to the same report."""
    r = check_dependency(line, _make_ctx())
    assert r is not None
    assert "`Fabric API`" in r.description
    assert "`Cloth Config`" in r.description


def test_missing_dependency_first_pattern_wins():
    """A lower-index alternative wins even when a later one matches earlier in the text."""
    log = (
        "Mod 'Alpha' (alpha) 1.0 requires any version of Beta, which is missing!\n"
        "Mod 'Gamma' (gamma) 2.0 requires version 1.5 or later of Delta, which is missing!\n"
    )
    r = check_dependency(log, _make_ctx())
    assert r is not None
    assert "`Gamma`" in r.description
    assert "`Delta`" in r.description
    assert "Alpha" not in r.description


def test_missing_dependency_name_with_apostrophe():
    """Mod names may contain quotes."""
    log = "Mod 'Farmer's Delight' (farmersdelight) 1.2.4 requires any version of Create, which is missing!"
    r = check_dependency(log, _make_ctx())
    assert r is not None
    assert "`Farmer's Delight`" in r.description
    assert "`Create`" in r.description


def test_java_launcher_hint_ignores_unterminated_replace_run():
    """A long run of unterminated Replace openers before the real hint still resolves it."""
    log = "- Replace '" * 20_000 + "\n- Replace 'Java' (java) 8 with version 21 or later."
    r = check_java(log, _make_ctx())
    assert r is not None
    assert "requires Java 21" in r.description


def test_mixin_injection_failure():
    r = check_mixin(INJECTION, _make_ctx())
    assert r is not None
    assert r.title == "Mixin inject failed"
    assert "`MinecraftClientMixin`" in r.description
    assert "`examplemod`" in r.description


def test_mixin_accessor_failure():
    r = check_mixin(ACCESSOR, _make_ctx())
    assert r is not None
    assert r.title == "Mixin inject failed"
    assert "`EntityAccessor`" in r.description
    assert "`otherfix`" in r.description


def test_mixin_apply_error():
    r = check_mixin(APPLY_ERROR, _make_ctx())
    assert r is not None
    assert r.title == "Mixin error"
    assert "`coolmod`" in r.description


def test_entrypoint_error():
    r = check_mixin(ENTRYPOINT, _make_ctx())
    assert r is not None
    assert r.title == "Entrypoint error"
    assert "`badmod`" in r.description
    assert r.severity == Severity.HIGH


def test_mixin_sub_checks_first_wins():
    """Only the first matching sub-check reports, in declared order."""
    r = check_mixin(ENTRYPOINT + "\n" + APPLY_ERROR, _make_ctx())
    assert r is not None
    assert r.title == "Mixin error"

    r = check_mixin(APPLY_ERROR + "\n" + INJECTION, _make_ctx())
    assert r.title == "Mixin inject failed"


def test_java_class_version_translated():
    """61.0 vs 52.0 means Java 17 needed, Java 8 present."""
    r = check_java(CLASS_VERSION.format(need="61.0", has="52.0"), _make_ctx())
    assert r is not None
    assert r.title == "Incorrect Java version"
    assert r.severity == Severity.HIGH
    assert "requires Java 17" in r.description
    assert "Java 8 is being used" in r.description
    assert "?version=17" in r.description


def test_java_unknown_class_version_degrades():
    """Untranslatable class-file version keeps the report with the generic message."""
    r = check_java(CLASS_VERSION.format(need="99.0", has="52.0"), _make_ctx())
    assert r is not None
    assert r.description == GENERIC_MESSAGE
    assert r.severity == Severity.HIGH


def test_java_launcher_hint():
    log = "- Replace 'Java' (java) 8 with version 17 or later."
    r = check_java(log, _make_ctx())
    assert r is not None
    assert "requires Java 17" in r.description
    assert "Java 8 is being used" in r.description


def test_classfile_table_is_bijection():
    """Each class-file version maps to exactly one Java release and back."""
    values = list(CLASSFILE_JAVA_VERSIONS.values())
    assert len(set(values)) == len(values)
    assert java_for_classfile("49.0") == "5"
    assert java_for_classfile("52.0") == "8"
    assert java_for_classfile("61.0") == "17"
    assert java_for_classfile("65.0") == "21"
    assert java_for_classfile("48.0") is None
    assert java_for_classfile("garbage") is None


def test_missing_field():
    r = check_missing_field("Caused by: java.lang.NoSuchFieldError: field_1234", _make_ctx())
    assert r is not None
    assert r.title == "Field missing error"


def test_polymc_only_uses_context():
    """Launcher advisory ignores text, fires on PolyMC only."""
    assert check_polymc("PolyMC version: 1.4.4", _make_ctx()) is None
    assert check_polymc("", _make_ctx(launcher=Launcher.PRISM)) is None
    r = check_polymc("", _make_ctx(launcher=Launcher.POLYMC))
    assert r is not None
    assert r.severity == Severity.MEDIUM


def test_optifabric_from_mod_list():
    r = check_optifabric("", _make_ctx(mods=["optifabric"]))
    assert r is not None
    assert r.severity == Severity.HIGH


@pytest.mark.parametrize("log", [
    "Mod 'Sodium' (sodium) 0.5.3 is incompatible with any version of mod 'OptiFabric' (optifabric)",
    "\tat me.modmuss50.optifabric.mod.OptifabricSetup.run(OptifabricSetup.java:42)",
])
def test_optifabric_from_text(log):
    assert check_optifabric(log, _make_ctx()) is not None


def test_optifabric_mod_id_is_case_sensitive():
    assert check_optifabric("", _make_ctx(mods=["OptiFabric"])) is None


def test_bclib_regardless_of_text():
    r = check_bclib("anything at all", _make_ctx(mods=["bclib"]))
    assert r is not None
    assert r.title == "BCLib detected"
    assert check_bclib("bclib", _make_ctx()) is None


def test_indium():
    r = check_indium(INDIUM, _make_ctx())
    assert r is not None
    assert r.title == "Missing Indium"


def test_no_rule_fires_on_plain_text():
    """No rule reports when none of its signatures occur."""
    ctx = _make_ctx()
    for check_fn in CHECKS:
        assert check_fn("[12:00:00] [main/INFO]: Loading Minecraft 1.20.1\n", ctx) is None


def test_registry_covers_every_rule():
    """Every report rule_id has an --explain entry."""
    samples = [
        (check_crash_report, CRASH_REPORT, _make_ctx()),
        (check_dependency, "Mod 'A' (a) requires any version of B, which is missing!", _make_ctx()),
        (check_mixin, ENTRYPOINT, _make_ctx()),
        (check_java, CLASS_VERSION.format(need="61.0", has="52.0"), _make_ctx()),
        (check_missing_field, "java.lang.NoSuchFieldError", _make_ctx()),
        (check_polymc, "", _make_ctx(launcher=Launcher.POLYMC)),
        (check_optifabric, "", _make_ctx(mods=["optifabric"])),
        (check_bclib, "", _make_ctx(mods=["bclib"])),
        (check_indium, INDIUM, _make_ctx()),
    ]
    ids = {fn(log, ctx).rule_id for fn, log, ctx in samples}
    assert ids == set(RULE_INFO)
    for info in RULE_INFO.values():
        assert {"title", "severity", "description", "when", "fix"} <= set(info)
        Severity.parse(info["severity"])
