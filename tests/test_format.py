"""Tests for output formatting."""

import click

from logsleuth.format import format_human, format_markdown, to_embed
from logsleuth.rules.base import CheckReport, Severity

HIGH = CheckReport(
    title="Missing dependency",
    description="The `Foo` mod needs `Bar` to be installed, but it is missing.",
    severity=Severity.HIGH,
    rule_id="missing_dependency",
)
INFO = CheckReport(
    title="Crash report analysis",
    description="Context: `Ticking entity`\n```\njava.lang.IllegalStateException: x\n```",
    severity=Severity.NONE,
    rule_id="crash_report_analysis",
)


def test_embed_tinted_by_highest_severity():
    embed = to_embed("latest.log", [INFO, HIGH])
    assert embed["title"] == "latest.log"
    assert embed["color"] == Severity.HIGH.color
    assert embed["color_hex"] == "#D62828"
    assert [f["name"] for f in embed["fields"]] == ["Crash report analysis", "Missing dependency"]


def test_embed_without_reports():
    embed = to_embed("clean.log", [])
    assert embed["severity"] is None
    assert embed["color"] == Severity.NONE.color
    assert embed["fields"] == []


def test_human_keeps_report_order():
    text = click.unstyle(format_human([("latest.log", [INFO, HIGH])]))
    assert text.index("Crash report analysis") < text.index("Missing dependency")
    assert "latest.log (1 high, 1 informational)" in text
    assert "● Missing dependency" in text
    assert "java.lang.IllegalStateException: x" in text
    assert "```" not in text


def test_human_verbose_shows_rule_ids():
    text = click.unstyle(format_human([("latest.log", [HIGH])], verbose=True))
    assert "[missing_dependency]" in text


def test_markdown_batches():
    md = format_markdown([("a.log", [HIGH]), ("b.log", [])])
    assert "## a.log" in md
    assert "### [HIGH] Missing dependency" in md
    assert "## b.log" in md
    assert "No known problems detected." in md
    assert "1 finding(s) across 2 log(s)." in md
