# Contains the adapter classes for communicating with the geocoding and routing APIs.

import math
import requests
import os
from abc import ABC, abstractmethod
from dotenv import load_dotenv

from api_structures import Coordinates, ItineraryOptions, Money, RouteCandidate
from trip_errors import ConfigurationError, GeocodingError, ProviderError

# --- API Configuration ---
# Keys are read from environment variables for security.
load_dotenv()
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")


class Geocoder(ABC):
    """
    Abstract Base Class (blueprint) for address resolution.
    The lookup only depends on this, so tests can pass in their own.
    """
    @abstractmethod
    def resolve(self, address: str) -> Coordinates:
        """Converts a string address into our standard Coordinates object."""
        pass


class GoogleMapsGeocoder(Geocoder):
    """The geocoder backed by the Google Maps Geocoding API."""
    GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: str | None = None, verbose: bool = False):
        self.api_key = api_key or GOOGLE_API_KEY
        self.verbose = verbose
        if not self.api_key:
            raise ConfigurationError(
                "FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")

    def resolve(self, address: str) -> Coordinates:
        if self.verbose:
            print(f"   > [Google] Geocoding address: '{address}'...")
        params = {
            'address': address,
            'key': self.api_key
        }
        try:
            response = requests.get(self.GEOCODING_URL, params=params)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise GeocodingError(
                address, f"error connecting to Google Geocoding API: {e}") from e
        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError(address, "response was not valid JSON") from e

        status = data.get('status') if isinstance(data, dict) else None
        if status != 'OK' or not data.get('results'):
            raise GeocodingError(address, f"status {status}")
        try:
            location = data['results'][0]['geometry']['location']
            # *** NORMALIZATION to our standard Coordinates object ***
            return Coordinates(lat=float(location['lat']), lon=float(location['lng']))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingError(address, "malformed geocoding response") from e


ITINERARY_QUERY = """
query SearchItinerary($input: SearchItineraryInput!) {
  searchItinerary(input: $input) {
    ... on SearchItinerarySuccessResult {
      routes {
        summary
        routeDistance {
          value
          unit
        }
        duration
        costs {
          fuel {
            amount
            currency
          }
          tolls {
            amount
            currency
          }
          electricity {
            amount
            currency
          }
        }
        totalCost {
          amount
          currency
        }
        carbonDioxideEmission
      }
    }
  }
}
"""


def build_itinerary_variables(start_coords: Coordinates, end_coords: Coordinates,
                              departure_name: str, arrival_name: str,
                              options: ItineraryOptions) -> dict:
    """Builds the GraphQL variables for one origin -> destination search."""
    return {
        'input': {
            'coordinates': [
                {'lng': start_coords.lon, 'lat': start_coords.lat},
                {'lng': end_coords.lon, 'lat': end_coords.lat},
            ],
            'departureName': departure_name,
            'arrivalName': arrival_name,
            'mode': options.mode,
            'device': options.device,
            'distanceSystem': options.distance_system,
            'energyCost': options.energy_cost,
            'currency': options.currency,
            'traffic': options.traffic,
            'carId': options.car_id,
        }
    }


def _number(raw: dict, key: str, where: str) -> float:
    """Reads a finite, non-bool number or raises ProviderError."""
    value = raw.get(key)
    # bool is an int subclass; NaN and infinity are accepted by .json().
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ProviderError(f"{where}.{key} is not a finite number: {value!r}")
    return value


def _text(raw: dict, key: str, where: str) -> str:
    """Reads a string or raises ProviderError."""
    value = raw.get(key)
    if not isinstance(value, str):
        raise ProviderError(f"{where}.{key} is not a string: {value!r}")
    return value


def _section(raw: dict, key: str) -> dict | None:
    """Reads an optional nested object; anything other than an object or null is an error."""
    value = raw.get(key)
    if value is not None and not isinstance(value, dict):
        raise ProviderError(f"{key} is not an object: {value!r}")
    return value


def _parse_money(raw: dict | None, where: str) -> Money | None:
    """Normalizes a cost block; an absent block means no such cost."""
    if not raw:
        return None
    return Money(amount=_number(raw, 'amount', where),
                 currency=_text(raw, 'currency', where))


def _parse_route(raw: dict) -> RouteCandidate:
    """Normalizes one route into our standard RouteCandidate object."""
    if not isinstance(raw, dict):
        raise ProviderError(f"route is not an object: {raw!r}")
    distance = _section(raw, 'routeDistance')
    if distance is None:
        raise ProviderError("route has no routeDistance")
    total_cost = _parse_money(_section(raw, 'totalCost'), 'totalCost')
    if total_cost is None:
        raise ProviderError("route has no totalCost")
    # The whole costs block may be null when no component applies.
    costs = _section(raw, 'costs') or {}
    return RouteCandidate(
        summary=raw.get('summary') or '',
        distance_value=_number(distance, 'value', 'routeDistance'),
        distance_unit=_text(distance, 'unit', 'routeDistance'),
        duration_ms=_number(raw, 'duration', 'route'),
        total_cost=total_cost,
        carbon_emission=_number(raw, 'carbonDioxideEmission', 'route'),
        fuel_cost=_parse_money(_section(costs, 'fuel'), 'costs.fuel'),
        toll_cost=_parse_money(_section(costs, 'tolls'), 'costs.tolls'),
        electricity_cost=_parse_money(_section(costs, 'electricity'), 'costs.electricity'),
    )


def parse_itinerary_response(payload) -> list[RouteCandidate]:
    """
    Turns a decoded GraphQL response into route candidates.
    Raises ProviderError for GraphQL errors, a non-success result,
    malformed routes, or an empty route list.
    """
    if not isinstance(payload, dict):
        raise ProviderError("response body is not a JSON object")
    if payload.get('errors'):
        messages = "; ".join(
            str(err.get('message', err)) if isinstance(err, dict) else str(err)
            for err in payload['errors'])
        raise ProviderError(f"GraphQL errors: {messages}")

    data = payload.get('data')
    result = data.get('searchItinerary') if isinstance(data, dict) else None
    # Any non-success member of the result union comes back without routes.
    if not isinstance(result, dict) or 'routes' not in result:
        raise ProviderError("itinerary search did not succeed")
    raw_routes = result['routes']
    if not raw_routes:
        raise ProviderError("no routes found between the two addresses")
    if not isinstance(raw_routes, list):
        raise ProviderError("routes is not a list")

    return [_parse_route(raw) for raw in raw_routes]


class MichelinAdapter:
    """The adapter for the ViaMichelin itinerary GraphQL API."""
    GRAPHQL_URL = "https://bff.viamichelin.com/graphql"
    HEADERS = {
        'accept': 'application/graphql+json, application/json',
        'content-type': 'application/json',
        'language': 'en-US',
        'origin': 'https://www.viamichelin.com',
    }

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def search_itinerary(self, start_coords: Coordinates, end_coords: Coordinates,
                         departure_name: str, arrival_name: str,
                         options: ItineraryOptions) -> list[RouteCandidate]:
        """Runs one itinerary search. There is no retry on failure."""
        body = {
            'query': ITINERARY_QUERY,
            'variables': build_itinerary_variables(
                start_coords, end_coords, departure_name, arrival_name, options),
        }
        if self.verbose:
            print(
                f"   > [Michelin] Searching itinerary '{departure_name}' -> '{arrival_name}' (car {options.car_id})...")
        try:
            response = requests.post(
                self.GRAPHQL_URL, json=body, headers=self.HEADERS)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ProviderError(
                f"network error while calling ViaMichelin: {e}") from e
        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("response was not valid JSON") from e

        routes = parse_itinerary_response(payload)
        if self.verbose:
            print(f"   > [Michelin] Received {len(routes)} route(s).")
        return routes
