"""JSON export of resolution reports.

Why JSON:
- The evidence trail (which candidate was classified how) can be diffed
  across host releases and fed to other tooling.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ResolutionReport


def export_report_json(*, report: ResolutionReport, output_path: Path) -> Path:
    """Export a `ResolutionReport` to UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def sanitize_target_for_filename(value: str) -> str:
    """Generate a filesystem-friendly slug for report files."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_", "."):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_.")
    return cleaned or "report"


def default_report_path(*, report: ResolutionReport, reports_dir: Path) -> Path:
    """`<reports_dir>/<base-type>-<protocol>.json`."""

    slug = sanitize_target_for_filename(report.base_type)
    return reports_dir / f"{slug}-{report.variant.value}.json"
