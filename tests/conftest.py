import pytest

from api_structures import Coordinates
from trip_errors import GeocodingError


@pytest.fixture(autouse=True)
def no_real_apis(monkeypatch):
    """Keeps tests away from real keys and real endpoints."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("MICHELIN_ENERGY_COST", raising=False)
    monkeypatch.delenv("MICHELIN_CAR_ID", raising=False)


class FakeGeocoder:
    """Resolves from a fixed table and records every address it is asked for."""

    def __init__(self, known: dict):
        self.known = known
        self.calls = []

    def resolve(self, address):
        self.calls.append(address)
        if address not in self.known:
            raise GeocodingError(address, "status ZERO_RESULTS")
        return self.known[address]


@pytest.fixture
def geocoder():
    return FakeGeocoder({
        "Lisbon, PT": Coordinates(lat=38.7223, lon=-9.1393),
        "Seville, ES": Coordinates(lat=37.3891, lon=-5.9845),
    })


def make_route(summary="A2, A6", duration=18_000_000, fuel=None, tolls=None,
               electricity=None, total=None, distance=455.3, unit="KILOMETERS",
               co2=112):
    return {
        "summary": summary,
        "routeDistance": {"value": distance, "unit": unit},
        "duration": duration,
        "costs": {"fuel": fuel, "tolls": tolls, "electricity": electricity},
        "totalCost": total or {"amount": 62.4, "currency": "EUR"},
        "carbonDioxideEmission": co2,
    }


def make_payload(routes):
    return {"data": {"searchItinerary": {"routes": routes}}}
