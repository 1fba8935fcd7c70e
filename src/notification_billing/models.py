"""Data models for notification billing."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from .errors import ValidationError

if TYPE_CHECKING:
    from .pricing import PriceTable


VALID_TYPES = ("sms", "email")
VALID_COUNTRIES = ("AU", "NZ", "UK")


class NotificationField(Enum):
    """Symbolic keys accepted by :meth:`Notification.from_map`."""

    COMPANY = "company"
    TYPE = "type"
    COUNTRY = "country"


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _lookup(data: Mapping[Any, Any], key: NotificationField) -> Any:
    """Return ``data[key.value]``, falling back to ``data[key]`` when unset."""
    value = data.get(key.value)
    if value is None:
        value = data.get(key)
    return value


@dataclass(frozen=True)
class Notification:
    """A single billable notification sent on behalf of a company.

    Fields are normalized on construction: ``company`` is stripped, ``type``
    is lowercased and ``country`` uppercased. Construction raises
    :class:`ValidationError` instead of producing an invalid instance.
    """

    company: str
    type: str
    country: str

    def __post_init__(self) -> None:
        company = _as_text(self.company).strip()
        notification_type = _as_text(self.type).lower().strip()
        country = _as_text(self.country).upper().strip()

        if not company:
            raise ValidationError(f"Invalid company: '{company}'")
        if notification_type not in VALID_TYPES:
            raise ValidationError(f"Invalid type: '{notification_type}'")
        if country not in VALID_COUNTRIES:
            raise ValidationError(f"Invalid country: '{country}'")

        object.__setattr__(self, "company", company)
        object.__setattr__(self, "type", notification_type)
        object.__setattr__(self, "country", country)

    @classmethod
    def from_map(cls, data: Mapping[Any, Any]) -> "Notification":
        """Build a notification from a log entry.

        Keys may be the plain strings ``"company"``, ``"type"`` and
        ``"country"`` or the matching :class:`NotificationField` members. The
        string key wins; the symbolic key is only consulted when the string
        key is missing or ``None``.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"Invalid notification entry: {data!r}")
        return cls(
            company=_lookup(data, NotificationField.COMPANY),
            type=_lookup(data, NotificationField.TYPE),
            country=_lookup(data, NotificationField.COUNTRY),
        )

    def matches(self, type: Any, country: Any) -> bool:
        """Return True if this notification has the given type and country."""
        return (
            self.type == _as_text(type).lower().strip()
            and self.country == _as_text(country).upper().strip()
        )


@dataclass
class CompanySummary:
    """Notifications accumulated for one company plus their priced total.

    ``notifications`` is the raw accumulated state; ``total_cost`` is derived
    and only changes through :meth:`calculate_cost`.
    """

    company_name: str
    notifications: List[Notification] = field(default_factory=list)
    total_cost: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.company_name = _as_text(self.company_name).strip()
        if not self.company_name:
            raise ValidationError("Company name cannot be empty")

    def add_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def calculate_cost(self, price_table: "PriceTable") -> Decimal:
        """Price every notification and store the sum as ``total_cost``.

        Re-running with the same table yields the same total; the previous
        value is replaced, never added to.

        Raises:
            PricingError: If a notification has no price in ``price_table``
        """
        self.total_cost = sum(
            (
                price_table.cost_for(type=notification.type, country=notification.country)
                for notification in self.notifications
            ),
            Decimal("0"),
        )
        return self.total_cost

    @property
    def notification_count(self) -> int:
        return len(self.notifications)

    def count_by_type(self, type: Any) -> int:
        wanted = _as_text(type).lower().strip()
        return sum(1 for n in self.notifications if n.type == wanted)

    def count_by_country(self, country: Any) -> int:
        wanted = _as_text(country).upper().strip()
        return sum(1 for n in self.notifications if n.country == wanted)

    def is_empty(self) -> bool:
        return not self.notifications

    def to_record(self) -> Dict[str, Any]:
        """Convert to the ``{company, notification_count, cost}`` output record."""
        return {
            "company": self.company_name,
            "notification_count": self.notification_count,
            "cost": self.total_cost,
        }


def counts_by_type(summary: CompanySummary, types: Optional[List[str]] = None) -> Dict[str, int]:
    """Return per-type notification counts for ``summary`` (all valid types by default)."""
    if types is None:
        types = list(VALID_TYPES)
    return {t: summary.count_by_type(t) for t in types}
