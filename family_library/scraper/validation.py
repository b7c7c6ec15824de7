# family_library/scraper/validation.py
"""
Coverage checks for a finished library report.

Flags groups where the page promised more titles than the scroll loop
managed to collect. These are warnings only; the report still exports.
"""

import logging
from typing import List

from family_library.models import LibraryReport

logger = logging.getLogger(__name__)


def coverage_warnings(report: LibraryReport) -> List[str]:
    """
    Build user-facing warnings for groups with fewer items than declared.

    Args:
        report: Finished LibraryReport

    Returns:
        List of warning strings (empty when every group is fully covered)

    Examples:
        >>> warnings = coverage_warnings(report)  # group declares 20, 15 found
        >>> warnings[0]
        "WARNING: 'Shared Library' found 15 of 20 declared games"
    """
    warnings = []

    for group in report.partial_groups():
        warnings.append(
            f"WARNING: '{group.label}' found {group.found_count} of {group.declared_count} declared games"
        )

    if report.total == 0:
        warnings.append("WARNING: no games were collected")

    return warnings


def apply_coverage_checks(report: LibraryReport) -> LibraryReport:
    """Attach coverage warnings to the report and log each one."""
    for warning in coverage_warnings(report):
        if warning not in report.warnings:
            report.warnings.append(warning)
            logger.warning(warning)
    return report
