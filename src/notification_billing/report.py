"""Billing report builder.

Organizes priced company summaries into a report structure and renders it as
plaintext or HTML using Jinja2 templates, or exports the raw records as CSV or
JSON. Rendering never alters the computed costs; money is only rounded when it
is formatted for display.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import ReportConfig
from .models import VALID_TYPES, CompanySummary, counts_by_type

OUTPUT_FORMATS = ("text", "html", "csv", "json")

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def json_default(value: Any) -> Any:
    """``json.dumps`` hook that writes ``Decimal`` costs as numbers."""
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class BillingReportBuilder:
    """Builds billing reports from company summaries."""

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        template_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        self.config = config or ReportConfig()
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["money"] = self.format_money

    def format_money(self, amount: Union[Decimal, int, float]) -> str:
        """Format an amount with the configured number of decimal places."""
        exponent = Decimal(1).scaleb(-self.config.decimal_places)
        value = Decimal(str(amount)).quantize(exponent, rounding=ROUND_HALF_UP)
        return f"{value} {self.config.currency}".strip()

    def build_report(self, summaries: Sequence[CompanySummary]) -> Dict[str, Any]:
        """Build the report data structure for already-priced summaries.

        Args:
            summaries: Company summaries, typically from ``CostCalculator.summaries()``

        Returns:
            Dictionary consumed by the report templates
        """
        companies = [
            {
                "company": summary.company_name,
                "notification_count": summary.notification_count,
                "cost": summary.total_cost,
                "by_type": counts_by_type(summary),
            }
            for summary in summaries
        ]
        total_cost = sum((summary.total_cost for summary in summaries), Decimal("0"))

        return {
            "title": self.config.title,
            "currency": self.config.currency,
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
            "types": list(VALID_TYPES),
            "companies": companies,
            "company_count": len(companies),
            "total_notifications": sum(c["notification_count"] for c in companies),
            "total_cost": total_cost,
        }

    def render_text(self, report: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template("billing_report.txt")
        return template.render(**report)

    def render_html(self, report: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template("billing_report.html")
        return template.render(**report)

    def export_to_csv(self, records: Sequence[Dict[str, Any]]) -> str:
        """Export output records as CSV with a header row."""
        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=["company", "notification_count", "cost"],
            lineterminator="\n",
        )
        writer.writeheader()
        for record in records:
            writer.writerow(
                {
                    "company": record["company"],
                    "notification_count": record["notification_count"],
                    "cost": record["cost"],
                }
            )
        return output.getvalue()

    def export_to_json(self, records: Sequence[Dict[str, Any]]) -> str:
        return json.dumps(list(records), indent=2, default=json_default)

    def render(self, summaries: Sequence[CompanySummary], output_format: str = "text") -> str:
        """Render summaries in the requested format ('text', 'html', 'csv' or 'json')."""
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported report format: {output_format}")

        if output_format == "csv":
            return self.export_to_csv([summary.to_record() for summary in summaries])
        elif output_format == "json":
            return self.export_to_json([summary.to_record() for summary in summaries])

        report = self.build_report(summaries)
        if output_format == "html":
            return self.render_html(report)
        return self.render_text(report)
