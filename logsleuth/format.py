"""Output formatting — terminal box layout, Markdown, and chat-embed dicts."""

import shutil
from typing import List, Sequence, Tuple

import click

from .engine import highest_severity
from .rules.base import CheckReport, Severity

Batch = Tuple[str, List[CheckReport]]

# Terminal color per severity
SEVERITY_FG = {
    Severity.NONE: "blue",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
}


def _get_width() -> int:
    try:
        return min(72, shutil.get_terminal_size((72, 24)).columns)
    except OSError:
        return 72


def _wrap(text: str, indent: int = 0, width: int = 72) -> List[str]:
    """Wrap text to width, first line has indent, following lines +2."""
    prefix = " " * indent
    extra = "  "
    lines = []
    rest = text
    first = True
    while rest:
        max_len = width - (indent if first else indent + len(extra))
        if len(rest) <= max_len:
            lines.append(prefix + rest)
            break
        break_at = rest.rfind(" ", 0, max_len + 1)
        if break_at <= 0:
            break_at = max_len
        chunk = rest[:break_at].strip()
        rest = rest[break_at:].strip()
        lines.append(prefix + chunk)
        prefix = " " * indent + extra
        first = False
    return lines


def _counts(reports: Sequence[CheckReport]) -> str:
    """Short context for a source line, e.g. '(2 high, 1 informational)'."""
    if not reports:
        return ""
    by_sev = {}
    for r in reports:
        by_sev[r.severity] = by_sev.get(r.severity, 0) + 1
    parts = []
    for sev in [Severity.HIGH, Severity.MEDIUM, Severity.NONE]:
        n = by_sev.get(sev, 0)
        if n:
            label = "informational" if sev == Severity.NONE else sev.value.lower()
            parts.append(f"{n} {label}")
    return " (" + ", ".join(parts) + ")"


def color_hex(severity: Severity) -> str:
    return f"#{severity.color:06X}"


def format_human(batches: Sequence[Batch], verbose: bool = False) -> str:
    """Build the human terminal output for one or more logs as a single string."""
    width = _get_width()
    lines = []

    lines.append("┌" + "─" * (width - 2) + "┐")
    lines.append(" logsleuth · log diagnosis")

    for source, reports in batches:
        lines.append("─" * width)
        top = highest_severity(reports)
        header = f" {source}{_counts(reports)}"
        lines.append(click.style(header, fg=SEVERITY_FG[top] if top else "green", bold=True))
        if not reports:
            lines.append(click.style(" No known problems detected.", dim=True))
            continue
        for r in reports:
            bullet = "●" if r.severity == Severity.HIGH else "○"
            title = f"{bullet} {r.title}"
            if verbose and r.rule_id:
                title = f"{title} [{r.rule_id}]"
            for ln in _wrap(title, indent=2, width=width):
                lines.append(click.style(ln, fg=SEVERITY_FG[r.severity]))
            for para in r.description.splitlines():
                if not para.strip() or para.startswith("```"):
                    continue
                for ln in _wrap(para, indent=4, width=width):
                    lines.append(click.style(ln, dim=True))

    lines.append("─" * width)
    footer = " Run with --json for machine output  ·  --ci for exit codes"
    if len(footer) > width:
        footer = " --json  ·  --ci  ·  --help"
    lines.append(click.style(footer, dim=True))
    lines.append("└" + "─" * (width - 2) + "┘")

    return "\n".join(lines)


def format_markdown(batches: Sequence[Batch]) -> str:
    """Markdown output for issues and PRs."""
    out = ["# logsleuth report"]
    for source, reports in batches:
        out.append("")
        out.append(f"## {source}")
        if not reports:
            out.append("")
            out.append("No known problems detected.")
            continue
        for r in reports:
            out.append("")
            out.append(f"### [{r.severity.value}] {r.title}")
            out.append("")
            out.append(r.description)
    total = sum(len(reports) for _, reports in batches)
    out.append(f"\n---\n{total} finding(s) across {len(batches)} log(s).")
    return "\n".join(out)


def to_embed(source: str, reports: Sequence[CheckReport]) -> dict:
    """Chat-embed shape: one titled field per report, tinted by the highest severity."""
    top = highest_severity(reports)
    return {
        "title": source,
        "color": (top or Severity.NONE).color,
        "color_hex": color_hex(top or Severity.NONE),
        "severity": top.value if top else None,
        "fields": [
            {
                "name": r.title,
                "value": r.description,
                "severity": r.severity.value,
                "rule_id": r.rule_id,
            }
            for r in reports
        ],
    }
