"""Entry point wrapping the cost calculation pipeline."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .calculator import CostCalculator, LogsData
from .logging_config import get_logger
from .models import CompanySummary
from .pricing import PricingData

logger = get_logger("app")


@contextmanager
def _log_failures() -> Iterator[None]:
    try:
        yield
    except Exception as e:
        logger.error(f"Error processing notification data: {e}")
        raise


class NotificationBillingApp:
    """Runs one price list against one batch of notification logs.

    Any error from parsing, validation or pricing is logged and re-raised
    unchanged.
    """

    def __init__(self, pricing_data: PricingData, logs_data: LogsData) -> None:
        self.pricing_data = pricing_data
        self.logs_data = logs_data

    @classmethod
    def call(cls, pricing_data: PricingData, logs_data: LogsData) -> List[Dict[str, Any]]:
        return cls(pricing_data, logs_data).run()

    def run(self) -> List[Dict[str, Any]]:
        """Return ``[{company, notification_count, cost}]`` sorted by company."""
        with _log_failures():
            return CostCalculator(self.pricing_data, self.logs_data).run()

    def summaries(self) -> List[CompanySummary]:
        """Return the priced :class:`CompanySummary` objects behind :meth:`run`."""
        with _log_failures():
            return CostCalculator(self.pricing_data, self.logs_data).summaries()


def calculate_billing(pricing_data: PricingData, logs_data: LogsData) -> List[Dict[str, Any]]:
    """Return billing records for one price list and one batch of logs.

    Each ``cost`` is a ``Decimal``. Pass ``default=json_default`` (from
    :mod:`notification_billing.report`) when serializing the records with
    :func:`json.dumps`.
    """
    return NotificationBillingApp.call(pricing_data, logs_data)
