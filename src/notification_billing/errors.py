"""Error taxonomy for notification billing.

Every failure raised by the pipeline derives from :class:`BillingError`, which
is a ``ValueError`` so callers that only care about bad input can catch the
builtin.
"""


class BillingError(ValueError):
    """Base class for all notification billing errors."""


class ConfigError(BillingError):
    """Raised when price or log configuration is malformed or missing."""


class ValidationError(BillingError):
    """Raised when a notification or company name fails domain constraints."""


class PricingError(BillingError):
    """Raised when a notification references a type/country with no price."""
