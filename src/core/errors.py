"""Error taxonomy for telemetry queries."""


class TelemetryError(Exception):
    """Base class for telemetry query errors."""


class InvalidRange(TelemetryError, ValueError):
    """Raised when a period/date combination cannot produce valid buckets.

    Always raised before the store is touched.
    """


class StoreUnavailable(TelemetryError):
    """Raised when the sample store cannot be read."""
