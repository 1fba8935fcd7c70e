"""Cost calculation pipeline.

Turns raw price data and raw notification logs into per-company cost records:
parse and validate both inputs, group notifications by company, price each
group and return the summaries sorted by company name.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Sequence, Union

from .errors import ConfigError
from .logging_config import get_logger
from .models import CompanySummary, Notification
from .pricing import PriceTable, PricingData

logger = get_logger("calculator")

LogsData = Union[str, Sequence[Mapping[Any, Any]]]


class CostCalculator:
    """Computes billing summaries for one batch of notifications.

    Both inputs are parsed eagerly, so an instance only exists if every price
    entry and every log entry is valid. :meth:`run` is a pure function of that
    parsed state and can be called any number of times.
    """

    def __init__(self, pricing_data: PricingData, notification_logs_data: LogsData) -> None:
        self.price_table = PriceTable(pricing_data)
        self.notifications: List[Notification] = self._parse_notifications(notification_logs_data)
        logger.debug(f"Parsed {len(self.notifications)} notifications")

    @staticmethod
    def _parse_notifications(logs_data: Any) -> List[Notification]:
        if isinstance(logs_data, (str, bytes)):
            try:
                entries = json.loads(logs_data)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Invalid JSON in notification logs: {exc}") from exc
            if not isinstance(entries, list):
                raise ConfigError("Invalid notification logs format")
        elif isinstance(logs_data, Sequence):
            entries = logs_data
        else:
            raise ConfigError("Invalid notification logs format")

        return [Notification.from_map(entry) for entry in entries]

    def _group_by_company(self) -> Dict[str, CompanySummary]:
        summaries: Dict[str, CompanySummary] = {}
        for notification in self.notifications:
            summary = summaries.get(notification.company)
            if summary is None:
                summary = summaries[notification.company] = CompanySummary(notification.company)
            summary.add_notification(notification)
        return summaries

    def summaries(self) -> List[CompanySummary]:
        """Return priced, non-empty company summaries sorted by company name.

        Raises:
            PricingError: If a notification has no price in the price table
        """
        grouped = self._group_by_company()
        for summary in grouped.values():
            summary.calculate_cost(self.price_table)

        return sorted(
            (summary for summary in grouped.values() if not summary.is_empty()),
            key=lambda summary: summary.company_name,
        )

    def run(self) -> List[Dict[str, Any]]:
        """Return the ``{company, notification_count, cost}`` records, sorted by company."""
        records = [summary.to_record() for summary in self.summaries()]
        logger.info(
            f"Calculated costs for {len(records)} companies "
            f"from {len(self.notifications)} notifications"
        )
        return records
