"""Configuration loader for notification billing."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_TITLE = "Notification Billing Report"
DEFAULT_CURRENCY = "AUD"
DEFAULT_DECIMAL_PLACES = 2


@dataclass
class ReportConfig:
    """Presentation settings for rendered billing reports."""

    title: str = DEFAULT_TITLE
    currency: str = DEFAULT_CURRENCY
    decimal_places: int = DEFAULT_DECIMAL_PLACES
    formats: List[str] = field(default_factory=lambda: ["text"])

    def __post_init__(self) -> None:
        self.title = self.title.strip() or DEFAULT_TITLE
        self.currency = self.currency.strip().upper()
        if self.decimal_places < 0:
            raise ValueError("decimal_places must not be negative")

    @classmethod
    def from_env(cls, base: Optional["ReportConfig"] = None) -> "ReportConfig":
        """Apply ``BILLING_REPORT_*`` environment overrides on top of ``base``."""
        base = base or cls()
        return cls(
            title=os.environ.get("BILLING_REPORT_TITLE", base.title),
            currency=os.environ.get("BILLING_REPORT_CURRENCY", base.currency),
            decimal_places=base.decimal_places,
            formats=list(base.formats),
        )


class BillingConfig:
    """Central configuration container for billing runs."""

    DEFAULT_CONFIG_PATH = Path("config/billing.yaml")
    DEFAULT_PRICING_FILE = Path("data/notification_prices.json")
    DEFAULT_LOGS_FILE = Path("data/notification_logs.json")

    def __init__(self, config_path: Optional[Path | str] = None) -> None:
        path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        if not path.is_absolute():
            path = Path.cwd() / path
        self.config_path = path
        self._data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {"data": {}, "report": {}, "logging": {}}
        with open(self.config_path, "r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    def _section(self, name: str) -> Dict[str, Any]:
        return self._data.get(name) or {}

    def _data_path(self, key: str, default: Path) -> Path:
        value = self._section("data").get(key)
        path = Path(value) if value else default
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    @property
    def pricing_file(self) -> Path:
        return self._data_path("pricing_file", self.DEFAULT_PRICING_FILE)

    @property
    def logs_file(self) -> Path:
        return self._data_path("logs_file", self.DEFAULT_LOGS_FILE)

    def get_report_setting(self, key: str, default: Any = None) -> Any:
        return self._section("report").get(key, default)

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        return self._section("logging").get(key, default)

    def report_config(self) -> ReportConfig:
        """Build a :class:`ReportConfig` from the ``report`` section."""
        return ReportConfig(
            title=str(self.get_report_setting("title", DEFAULT_TITLE)),
            currency=str(self.get_report_setting("currency", DEFAULT_CURRENCY)),
            decimal_places=int(self.get_report_setting("decimal_places", DEFAULT_DECIMAL_PLACES)),
            formats=list(self.get_report_setting("formats", ["text"])),
        )
