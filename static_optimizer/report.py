"""
Report rendering: plain text for terminals, JSON for tools.

Text output groups issues by category in the fixed order and shows each
issue as a small card with its severity, detail and fix.
"""

from .schemas import AuditReport

CLEAN_MESSAGE = "No significant issues found. Your code looks great."


def render_text(report: AuditReport) -> str:
    """Render a report as grouped plain text."""
    lines = []
    if report.source:
        lines.append(f"== {report.source} ==")

    if not report.has_issues:
        lines.append(CLEAN_MESSAGE)
        return "\n".join(lines)

    for category, issues in report.by_category().items():
        if lines:
            lines.append("")
        lines.append(f"{category.value} ({len(issues)})")
        lines.append("-" * len(lines[-1]))
        for issue in issues:
            lines.append(f"[{issue.severity.value.upper()}] {issue.title}")
            lines.append(f"    {issue.description}")
            lines.append(f"    Fix: {issue.suggestion}")

    return "\n".join(lines)


def render_json(report: AuditReport) -> str:
    return report.model_dump_json(indent=2)
