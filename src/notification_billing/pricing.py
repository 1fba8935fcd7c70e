"""Price table for notification billing.

Parses the price list (a JSON string or the equivalent list of entries) into a
lookup of notification type -> country -> unit cost. Prices are held as
``Decimal`` so summing them never drifts; JSON input is parsed with
``parse_float=Decimal`` and structured input is converted through ``str``.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Union

from .errors import ConfigError, PricingError
from .logging_config import get_logger

logger = get_logger("pricing")

PricingData = Union[str, Sequence[Mapping[str, Any]]]


def _to_price(notification_type: str, country: str, value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ConfigError(f"Invalid price for {notification_type}/{country}: {value!r}")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigError(f"Invalid price for {notification_type}/{country}: {value!r}") from exc
    if not price.is_finite() or price < 0:
        raise ConfigError(f"Invalid price for {notification_type}/{country}: {value!r}")
    return price


class PriceTable:
    """Read-only mapping from (notification type, country) to unit cost."""

    def __init__(self, prices_data: PricingData) -> None:
        entries = self._parse_prices(prices_data)
        self._prices: Dict[str, Mapping[str, Decimal]] = self._build(entries)
        logger.debug(f"Loaded prices for types: {', '.join(self._prices)}")

    @staticmethod
    def _parse_prices(prices_data: Any) -> Any:
        if isinstance(prices_data, (str, bytes)):
            try:
                return json.loads(prices_data, parse_float=Decimal)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Invalid JSON in pricing data: {exc}") from exc
        if isinstance(prices_data, (Sequence, Mapping)):
            return prices_data
        raise ConfigError("Invalid pricing data format")

    @staticmethod
    def _build(entries: Any) -> Dict[str, Mapping[str, Decimal]]:
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise ConfigError("Pricing data must be an array")

        prices: Dict[str, Mapping[str, Decimal]] = {}
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise ConfigError("Missing notification_type")

            notification_type = entry.get("notification_type")
            country_prices = entry.get("prices")

            if not notification_type:
                raise ConfigError("Missing notification_type")
            if not isinstance(country_prices, Mapping):
                raise ConfigError(f"Missing prices for {notification_type}")

            # Last entry for a type wins
            prices[str(notification_type)] = MappingProxyType(
                {
                    str(country).upper(): _to_price(notification_type, country, value)
                    for country, value in country_prices.items()
                }
            )

        if not prices:
            raise ConfigError("No pricing data found")
        return prices

    def _prices_for(self, type: Any) -> Mapping[str, Decimal]:
        type_key = str(type).lower()
        if type_key not in self._prices:
            raise PricingError(f"Unknown notification type: {type}")
        return self._prices[type_key]

    def cost_for(self, type: Any, country: Any) -> Decimal:
        """Return the unit price for a notification type sent to a country.

        Raises:
            PricingError: If the type, or the country for that type, is not priced
        """
        country_prices = self._prices_for(type)
        country_key = str(country).upper()
        if country_key not in country_prices:
            raise PricingError(f"Unknown country: {country}")
        return country_prices[country_key]

    def available_types(self) -> List[str]:
        return list(self._prices)

    def available_countries_for(self, type: Any) -> List[str]:
        return list(self._prices_for(type))

    @property
    def prices(self) -> Mapping[str, Mapping[str, Decimal]]:
        return MappingProxyType(self._prices)

    def to_list(self) -> List[Dict[str, Any]]:
        """Serialize back to the ``[{notification_type, prices}]`` entry form."""
        return [
            {"notification_type": notification_type, "prices": dict(country_prices)}
            for notification_type, country_prices in self._prices.items()
        ]

    def __repr__(self) -> str:
        return f"PriceTable(types={self.available_types()!r})"
