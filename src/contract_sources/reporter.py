"""
Run report persistence.

Writes the per-address outcome report next to the downloaded trees and logs
a short summary of the run.
"""

import json
import logging
from pathlib import Path

from .models import RunReport

logger = logging.getLogger(__name__)

REPORT_FILENAME = "index.json"


def save_run_report(report: RunReport, output_dir: Path) -> Path:
    """
    Save the run report as indented JSON.

    Args:
        report: Finished run report
        output_dir: Output root; the report is written as ``index.json``

    Returns:
        Path of the written report
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / REPORT_FILENAME

    payload = report.model_dump()
    payload["totals"] = {
        "total": report.total,
        "written": report.count("written"),
        "unverified": report.count("unverified"),
        "failed": report.count("failed"),
    }
    report_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Run report saved to {report_path}")
    return report_path


def log_run_summary(report: RunReport) -> None:
    """Log totals and every failed address."""
    logger.info(f"\n{'='*60}")
    logger.info(
        f"Done: {report.count('written')} written, {report.count('unverified')} unverified, "
        f"{report.count('failed')} failed (of {report.total})"
    )
    for outcome in report.outcomes:
        if outcome.status == "failed":
            logger.warning(f"  ❌ {outcome.address} [{outcome.failed_stage}]: {outcome.error}")
        elif outcome.implementation_status in ("failed", "unverified"):
            logger.warning(f"  ⚠️  {outcome.address} implementation {outcome.implementation_address}: {outcome.implementation_error}")
    logger.info(f"{'='*60}\n")
