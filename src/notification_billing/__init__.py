"""Notification billing package namespace."""

from importlib import import_module
from typing import Any

__all__ = [
    "BillingError",
    "ConfigError",
    "ValidationError",
    "PricingError",
    "Notification",
    "NotificationField",
    "CompanySummary",
    "PriceTable",
    "CostCalculator",
    "NotificationBillingApp",
    "calculate_billing",
    "BillingConfig",
    "ReportConfig",
    "BillingReportBuilder",
    "json_default",
]

_EXPORTS = {
    "BillingError": "errors",
    "ConfigError": "errors",
    "ValidationError": "errors",
    "PricingError": "errors",
    "Notification": "models",
    "NotificationField": "models",
    "CompanySummary": "models",
    "PriceTable": "pricing",
    "CostCalculator": "calculator",
    "NotificationBillingApp": "app",
    "calculate_billing": "app",
    "BillingConfig": "config",
    "ReportConfig": "config",
    "BillingReportBuilder": "report",
    "json_default": "report",
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = import_module(f"{__name__}.{_EXPORTS[name]}")
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(__all__)
