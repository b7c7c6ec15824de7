# family_library/exporter.py
"""
Render a LibraryReport as plain text or JSON and hand it off to disk/clipboard.

Both formats are built from the same report; the format is only a choice
made at export time.
"""

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from family_library.models import LibraryItem, LibraryReport
from family_library.thresholds import DEFAULT_ACCOUNT_NAME

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("text", "json")
_EXTENSIONS = {"text": "txt", "json": "json"}


def sanitize_account(label: Optional[str]) -> str:
    """Keep letters, digits and spaces so the label is safe in a filename."""
    clean = re.sub(r"[^a-zA-Z0-9 ]", "", label or "").strip()
    return clean or DEFAULT_ACCOUNT_NAME


def _item_tags(item: LibraryItem) -> List[str]:
    tags = []
    if item.unavailable:
        tags.append("Unavailable")
    if item.family_owners:
        tags.append(f"Owners: {item.family_owners}")
    return tags


def format_text(report: LibraryReport) -> str:
    """
    Render the report as a readable list grouped by category.

    Example output:
        Steam Library: Gabe
        Date: 18/10/2026
        Total Games: 2

        --- SHARED LIBRARY (2 games) ---
        • Half-Life [Owners: 2]
        • Portal [Unavailable]
    """
    lines = [
        f"Steam Library: {sanitize_account(report.account)}",
        f"Date: {report.extracted_at.strftime('%d/%m/%Y')}",
        f"Total Games: {report.total}",
        "",
    ]

    for group in report.groups:
        header = f"--- {group.label.upper()} ({group.found_count} games) ---"
        if group.is_partial:
            header = f"--- {group.label.upper()} ({group.found_count} games, expected {group.declared_count}) ---"
        lines.append(header)

        for item in group.items:
            tags = _item_tags(item)
            tag_string = f" [{' | '.join(tags)}]" if tags else ""
            lines.append(f"• {item.name}{tag_string}")
        lines.append("")

    if report.warnings:
        lines.append("Warnings:")
        lines.extend(f"  ! {warning}" for warning in report.warnings)
        lines.append("")

    return "\n".join(lines)


def _item_to_dict(item: LibraryItem) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": item.name}
    if item.unavailable:
        data["unavailable"] = True
    if item.family_owners:
        data["familyOwners"] = item.family_owners
    if item.store_url:
        data["storeUrl"] = item.store_url
    return data


def report_to_dict(report: LibraryReport) -> Dict[str, Any]:
    groups = []
    for group in report.groups:
        entry: Dict[str, Any] = {
            "label": group.label,
            "declaredCount": group.declared_count,
            "foundCount": group.found_count,
        }
        if group.is_partial:
            entry["mismatch"] = True
        entry["items"] = [_item_to_dict(item) for item in group.items]
        groups.append(entry)

    return {
        "account": sanitize_account(report.account),
        "extractedAt": report.extracted_at.isoformat(),
        "total": report.total,
        "warnings": list(report.warnings),
        "groups": groups,
    }


def format_json(report: LibraryReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)


def render(report: LibraryReport, fmt: str = "text") -> str:
    if fmt == "text":
        return format_text(report)
    if fmt == "json":
        return format_json(report)
    raise ValueError(f"Unknown export format '{fmt}' (expected one of: {', '.join(EXPORT_FORMATS)})")


def export_filename(report: LibraryReport, fmt: str = "text") -> str:
    if fmt not in _EXTENSIONS:
        raise ValueError(f"Unknown export format '{fmt}'")
    file_date = report.extracted_at.strftime("%d-%m-%Y")
    return f"Library {sanitize_account(report.account)} {file_date}.{_EXTENSIONS[fmt]}"


def write_export(report: LibraryReport, output_dir: str = ".", fmt: str = "text") -> str:
    """
    Write the rendered report to output_dir.

    Returns:
        Path of the written file
    """
    payload = render(report, fmt)
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, export_filename(report, fmt))
    with open(path, "w", encoding="utf-8") as f:
        f.write(payload)
    logger.info("Wrote %s export to %s", fmt, path)
    return path


def copy_to_clipboard(text: str, clipboard) -> bool:
    """
    Offer text to a clipboard; failures are logged and never raised.

    Args:
        text: Payload to copy
        clipboard: Object exposing copy_to_clipboard(text), e.g. PlaywrightSurface

    Returns:
        True if the copy succeeded
    """
    try:
        clipboard.copy_to_clipboard(text)
    except Exception as exc:
        logger.warning("Couldn't copy to clipboard, the file export still works: %s", exc)
        return False
    logger.info("Copied the formatted list to the clipboard")
    return True
