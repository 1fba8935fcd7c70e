from pathlib import Path

import pytest

from notification_billing.config import BillingConfig, ReportConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "billing.yaml"
    path.write_text(
        "\n".join(
            [
                "data:",
                "  pricing_file: prices.json",
                f"  logs_file: {tmp_path / 'logs.json'}",
                "report:",
                "  title: March Billing",
                "  currency: nzd",
                "  decimal_places: 3",
                "  formats: [html, csv]",
                "logging:",
                "  level: DEBUG",
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_config_loads_data_paths(config_file, tmp_path):
    config = BillingConfig(config_file)

    assert config.pricing_file == Path.cwd() / "prices.json"
    assert config.logs_file == tmp_path / "logs.json"


def test_report_config_from_file(config_file):
    report = BillingConfig(config_file).report_config()

    assert report.title == "March Billing"
    assert report.currency == "NZD"
    assert report.decimal_places == 3
    assert report.formats == ["html", "csv"]


def test_get_settings(config_file):
    config = BillingConfig(config_file)

    assert config.get_logging_setting("level") == "DEBUG"
    assert config.get_logging_setting("log_dir", "logs") == "logs"
    assert config.get_report_setting("missing", 7) == 7


def test_missing_config_file_uses_defaults(tmp_path):
    config = BillingConfig(tmp_path / "nope.yaml")

    assert config.pricing_file == Path.cwd() / "data" / "notification_prices.json"
    assert config.logs_file == Path.cwd() / "data" / "notification_logs.json"
    assert config.report_config() == ReportConfig()


def test_empty_config_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert BillingConfig(path).report_config().title == "Notification Billing Report"


def test_report_config_env_overrides(monkeypatch):
    monkeypatch.setenv("BILLING_REPORT_TITLE", "Env Title")
    monkeypatch.setenv("BILLING_REPORT_CURRENCY", "gbp")

    report = ReportConfig.from_env(ReportConfig(decimal_places=4))

    assert report.title == "Env Title"
    assert report.currency == "GBP"
    assert report.decimal_places == 4


def test_report_config_rejects_negative_decimal_places():
    with pytest.raises(ValueError):
        ReportConfig(decimal_places=-1)
