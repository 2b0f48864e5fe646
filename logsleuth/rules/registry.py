"""Rule descriptions for --explain."""

RULE_INFO: dict[str, dict[str, str]] = {
    "crash_report_analysis": {
        "title": "Crash report analysis",
        "severity": "NONE",
        "description": "Summarizes a vanilla crash report: its description line and the first error line.",
        "when": "Log contains a '---- Minecraft Crash Report ----' header with Time and Description.",
        "fix": "Informational. Read the quoted error to find the failing mod or class.",
    },
    "missing_dependency": {
        "title": "Missing dependency",
        "severity": "HIGH",
        "description": "A mod declares a dependency on another mod that is not installed.",
        "when": "Fabric Loader reports \"Mod 'X' (x) requires ... of Y, which is missing!\".",
        "fix": "Install the named dependency in a version the dependent accepts.",
    },
    "mixin_failure": {
        "title": "Mixin inject failed / Mixin error / Entrypoint error",
        "severity": "HIGH",
        "description": "A mod's mixin could not be applied, or its entrypoint threw during startup.",
        "when": "InvalidInjectionException, InvalidAccessorException, MixinApplyError or a failed entrypoint stage; first match wins.",
        "fix": "Check the named mod's version against the Minecraft version and other installed mods.",
    },
    "java_version_mismatch": {
        "title": "Incorrect Java version",
        "severity": "HIGH",
        "description": "Minecraft or a mod needs a newer Java than the one running.",
        "when": "Launcher 'Replace ... (java) X with version Y or later' hint, or UnsupportedClassVersionError.",
        "fix": "Install the required Java release and select it in the launcher.",
    },
    "missing_field": {
        "title": "Field missing error",
        "severity": "HIGH",
        "description": "A field was stripped on the logical server, typically a client-only field.",
        "when": "java.lang.NoSuchFieldError appears in the log.",
        "fix": "Update the offending mod, or try downgrading Fabric Loader.",
    },
    "polymc_launcher": {
        "title": "PolyMC Detected",
        "severity": "MEDIUM",
        "description": "The log was produced by PolyMC, an outdated launcher.",
        "when": "Launcher detected as PolyMC from the log header.",
        "fix": "Switch to Prism Launcher.",
    },
    "optifabric": {
        "title": "OptiFabric detected",
        "severity": "HIGH",
        "description": "OptiFine on Fabric via OptiFabric breaks many mods.",
        "when": "optifabric is in the mod list, or the log mentions it.",
        "fix": "Replace OptiFine with one of the available alternatives.",
    },
    "bclib": {
        "title": "BCLib detected",
        "severity": "MEDIUM",
        "description": "BCLib is known to cause issues with some mods.",
        "when": "bclib is in the mod list.",
        "fix": "Try reproducing the problem without BCLib.",
    },
    "missing_indium": {
        "title": "Missing Indium",
        "severity": "HIGH",
        "description": "A mod uses the Fabric Rendering API while Sodium is loaded without Indium.",
        "when": "NullPointerException because RendererAccess.getRenderer() is null.",
        "fix": "Install Indium alongside Sodium.",
    },
}
