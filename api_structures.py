# Defines the standardized, internal data structures for the application.

import math
from dataclasses import dataclass
from numbers import Real
from typing import NamedTuple

from trip_errors import ConfigurationError

DEFAULT_ENERGY_COST = 1.75
# Peugeot 2008 II 1.2 PureTech 100cv
DEFAULT_CAR_ID = "45003"


@dataclass
class Coordinates:
    """A standardized representation of geographic coordinates."""
    lat: float
    lon: float


@dataclass
class Money:
    """An amount in a given currency, as the provider reports it."""
    amount: float
    currency: str


@dataclass
class RouteCandidate:
    """One itinerary returned by the routing provider."""
    summary: str
    distance_value: float
    distance_unit: str
    duration_ms: int
    total_cost: Money
    carbon_emission: float
    fuel_cost: Money | None = None
    toll_cost: Money | None = None
    electricity_cost: Money | None = None


class TripSummary(NamedTuple):
    """The six display fields of a trip, in spreadsheet column order."""
    distance: str
    duration: str
    fuel_cost: str
    toll_cost: str
    total_cost: str
    carbon_emission: str


@dataclass
class ItineraryOptions:
    """
    The fixed and caller-supplied settings sent with every itinerary search.
    Only energy_cost and car_id are expected to change between calls.
    """
    energy_cost: float = DEFAULT_ENERGY_COST
    car_id: str = DEFAULT_CAR_ID
    mode: str = "CAR"
    device: str = "DESKTOP"
    distance_system: str = "METRIC"
    currency: str = "eur"
    traffic: str = "NONE"

    def validate(self):
        """Raises ConfigurationError before a bad value can reach the remote call."""
        # bool is a Real too, but True is not a price.
        if isinstance(self.energy_cost, bool) or not isinstance(self.energy_cost, Real):
            raise ConfigurationError(
                f"Energy cost must be a number, got {self.energy_cost!r}.")
        if not math.isfinite(self.energy_cost) or self.energy_cost < 0:
            raise ConfigurationError(
                f"Energy cost must be a finite number, zero or positive, got {self.energy_cost}.")
        if not isinstance(self.car_id, str) or not self.car_id.strip():
            raise ConfigurationError("A car id is required.")
