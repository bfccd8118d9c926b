"""
Line-oriented rendering of depth check results.

Each violation is printed as a header followed by one line per hop:

    Serialization depth exceeded by the following member chain:
    <destination type> <source type>.<field>
"""

from typing import List

from serdepth.analyzer import DepthCheckReport
from serdepth.walker import ViolationReport

VIOLATION_HEADER = "Serialization depth exceeded by the following member chain:"


def format_violation(violation: ViolationReport) -> str:
    return "\n".join([VIOLATION_HEADER] + violation.lines())


def format_report(report: DepthCheckReport) -> str:
    lines: List[str] = []
    lines.append("-------------------------------------------------------")
    lines.append("Beginning walk of dependency graph...")
    lines.append("")

    for violation in report.violations:
        lines.append(format_violation(violation))
        lines.append("")

    for warning in report.warnings:
        lines.append(f"warning: {warning}")

    lines.append(
        f"...done. {len(report.roots)} root type(s), {report.serializable_types} serializable type(s), "
        f"{len(report.violations)} chain(s) reaching depth {report.max_depth}."
    )
    return "\n".join(lines)
