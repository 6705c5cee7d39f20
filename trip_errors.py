# Errors raised by a trip cost lookup. Each one aborts the whole lookup.


class TripCostError(Exception):
    """Base class for every lookup failure."""


class GeocodingError(TripCostError):
    """An address could not be turned into coordinates."""

    def __init__(self, address: str, reason: str | None = None):
        self.address = address
        self.reason = reason
        message = f"Unable to geocode address: {address}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProviderError(TripCostError):
    """The routing provider call failed or returned unusable data."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Routing provider error: {reason}")


class ConfigurationError(TripCostError, ValueError):
    """Invalid input or missing configuration, caught before any network call."""
