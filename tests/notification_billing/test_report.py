"""Tests for billing report rendering."""

import csv
import io
import json
from decimal import Decimal

import pytest

from notification_billing.calculator import CostCalculator
from notification_billing.config import ReportConfig
from notification_billing.report import BillingReportBuilder


@pytest.fixture
def summaries(pricing_json):
    logs = [
        {"company": "Apple", "type": "sms", "country": "AU"},
        {"company": "Apple", "type": "email", "country": "NZ"},
        {"company": "<Script> & Co", "type": "sms", "country": "UK"},
    ]
    return CostCalculator(pricing_json, logs).summaries()


@pytest.fixture
def builder():
    return BillingReportBuilder(config=ReportConfig(title="Test Report", currency="AUD"))


def test_build_report_totals(builder, summaries):
    report = builder.build_report(summaries)

    assert report["title"] == "Test Report"
    assert report["company_count"] == 2
    assert report["total_notifications"] == 3
    assert report["total_cost"] == Decimal("0.98")
    assert report["types"] == ["sms", "email"]


def test_build_report_company_breakdown(builder, summaries):
    report = builder.build_report(summaries)
    apple = next(c for c in report["companies"] if c["company"] == "Apple")

    assert apple["notification_count"] == 2
    assert apple["cost"] == Decimal("0.58")
    assert apple["by_type"] == {"sms": 1, "email": 1}


def test_format_money_rounds_for_display_only(summaries):
    builder = BillingReportBuilder(config=ReportConfig(currency="NZD", decimal_places=1))

    assert builder.format_money(Decimal("0.58")) == "0.6 NZD"
    assert builder.format_money(Decimal("0.25")) == "0.3 NZD"
    assert builder.format_money(2) == "2.0 NZD"
    assert summaries[1].company_name == "Apple"
    assert summaries[1].total_cost == Decimal("0.58")


def test_render_text(builder, summaries):
    text = builder.render(summaries, "text")

    assert "Test Report" in text
    assert "Apple: 2 notifications, sms 1, email 1 - 0.58 AUD" in text
    assert "Total cost: 0.98 AUD" in text


def test_render_text_without_companies(builder):
    text = builder.render([], "text")

    assert "No notifications to bill." in text
    assert "Total cost: 0.00 AUD" in text


def test_render_html_escapes_company_names(builder, summaries):
    html = builder.render(summaries, "html")

    assert "<h1>Test Report</h1>" in html
    assert "&lt;Script&gt; &amp; Co" in html
    assert "<Script>" not in html
    assert "0.98 AUD" in html


def test_export_to_csv(builder, summaries):
    content = builder.render(summaries, "csv")
    rows = list(csv.DictReader(io.StringIO(content)))

    assert [row["company"] for row in rows] == ["<Script> & Co", "Apple"]
    assert rows[1]["notification_count"] == "2"
    assert Decimal(rows[1]["cost"]) == Decimal("0.58")


def test_export_to_json(builder, summaries):
    records = json.loads(builder.render(summaries, "json"))

    assert records[1] == {"company": "Apple", "notification_count": 2, "cost": 0.58}


def test_unsupported_format(builder, summaries):
    with pytest.raises(ValueError, match="Unsupported report format: pdf"):
        builder.render(summaries, "pdf")
