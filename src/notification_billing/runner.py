"""Notification billing runner.

Reads the price list and notification logs from disk, computes per-company
costs and writes a rendered report to stdout or a file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from .app import NotificationBillingApp
from .config import BillingConfig, ReportConfig
from .errors import BillingError
from .logging_config import setup_logging
from .report import OUTPUT_FORMATS, BillingReportBuilder


@dataclass
class RunSummary:
    """Summary of a billing run."""

    companies: int = 0
    notifications: int = 0
    total_cost: Decimal = Decimal("0")
    output_path: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def exit_code(self) -> int:
        return 1 if self.errors else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary for JSON serialization."""
        return {
            "companies": self.companies,
            "notifications": self.notifications,
            "total_cost": str(self.total_cost),
            "output_path": self.output_path,
            "errors": self.errors,
            "exit_code": self.exit_code(),
        }


class BillingRunner:
    """Runs the billing pipeline against files on disk."""

    def __init__(
        self,
        pricing_file: Path,
        logs_file: Path,
        report_config: Optional[ReportConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.pricing_file = Path(pricing_file)
        self.logs_file = Path(logs_file)
        self.report_builder = BillingReportBuilder(config=report_config)
        self.logger = logger or logging.getLogger(__name__)

    def _read(self, path: Path, label: str) -> str:
        if not path.exists():
            raise FileNotFoundError(f"{label} file not found: {path}")
        return path.read_text(encoding="utf-8")

    def run(self, *, output_format: str = "text", output_path: Optional[Path] = None) -> RunSummary:
        """Compute costs and write the rendered report.

        Args:
            output_format: One of 'text', 'html', 'csv', 'json'
            output_path: File to write the report to (stdout when omitted)

        Returns:
            RunSummary with totals and any errors encountered
        """
        summary = RunSummary()

        try:
            pricing_json = self._read(self.pricing_file, "Pricing")
            logs_json = self._read(self.logs_file, "Notification logs")
            self.logger.info(f"Loaded pricing from {self.pricing_file} and logs from {self.logs_file}")

            summaries = NotificationBillingApp(pricing_json, logs_json).summaries()
        except (BillingError, OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Billing run failed: {e}")
            summary.errors.append(str(e))
            return summary

        summary.companies = len(summaries)
        summary.notifications = sum(s.notification_count for s in summaries)
        summary.total_cost = sum((s.total_cost for s in summaries), Decimal("0"))

        content = self.report_builder.render(summaries, output_format)
        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
            summary.output_path = str(output_path)
            self.logger.info(f"Wrote {output_format} report: {output_path}")
        else:
            sys.stdout.write(content)
            if not content.endswith("\n"):
                sys.stdout.write("\n")

        self.logger.info(
            f"Billed {summary.notifications} notifications across "
            f"{summary.companies} companies, total {summary.total_cost}"
        )
        return summary


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the billing runner."""
    parser = argparse.ArgumentParser(
        description="Calculate per-company notification costs from a price list and notification logs"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to billing configuration YAML file (default: config/billing.yaml)",
    )
    parser.add_argument(
        "--pricing",
        type=Path,
        help="Path to pricing JSON file (overrides config)",
    )
    parser.add_argument(
        "--logs",
        type=Path,
        help="Path to notification logs JSON file (overrides config)",
    )
    parser.add_argument(
        "--format",
        choices=list(OUTPUT_FORMATS),
        help="Report format (default: first format in config, else text)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--json-summary",
        action="store_true",
        help="Print the run summary as JSON to stderr",
    )

    args = parser.parse_args(argv)

    config = BillingConfig(args.config)

    level_name = str(config.get_logging_setting("level", "INFO")).upper()
    level = logging.DEBUG if args.verbose else getattr(logging, level_name, logging.INFO)
    log_file = args.log_file or config.get_logging_setting("log_file")
    log_dir = config.get_logging_setting("log_dir")
    logger = setup_logging(
        log_file=Path(log_file) if log_file else None,
        log_dir=Path(log_dir) if log_dir else None,
        level=level,
    ).getChild("runner")

    report_config = ReportConfig.from_env(config.report_config())
    output_format = args.format or (report_config.formats[0] if report_config.formats else "text")
    if output_format not in OUTPUT_FORMATS:
        logger.error(f"Unsupported report format in config: {output_format}")
        return 1

    runner = BillingRunner(
        pricing_file=args.pricing or config.pricing_file,
        logs_file=args.logs or config.logs_file,
        report_config=report_config,
        logger=logger,
    )
    summary = runner.run(output_format=output_format, output_path=args.output)

    if args.json_summary:
        print(json.dumps(summary.to_dict(), indent=2), file=sys.stderr)

    return summary.exit_code()


if __name__ == "__main__":
    sys.exit(main())
