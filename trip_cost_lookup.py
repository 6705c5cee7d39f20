# Looks up distance, duration, costs and emissions for a car trip between two addresses.

import os
import sys
import argparse
from dotenv import load_dotenv

from api_adapters import Geocoder, GoogleMapsGeocoder, MichelinAdapter
from api_structures import (DEFAULT_CAR_ID, DEFAULT_ENERGY_COST, ItineraryOptions,
                            Money, RouteCandidate, TripSummary)
from trip_errors import ConfigurationError, ProviderError, TripCostError

NOT_AVAILABLE = "N/A"
COLUMN_LABELS = ("Distance", "Duration", "Fuel Cost",
                 "Toll Cost", "Total Cost", "Carbon Emission")

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000


# --- Formatting ---

def _format_number(value) -> str:
    """Prints numbers as the provider's JSON does: 12 rather than 12.0."""
    # Exponent forms still differ: Python prints 1e-07 where JSON has 1e-7.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_distance(value: float, unit: str) -> str:
    """Formats a distance as "<value> <unit>", with the unit lower-cased."""
    return f"{_format_number(value)} {unit.lower()}"


def format_duration(duration_ms: int) -> str:
    """Converts milliseconds into 'H hrs M mins'. Seconds are truncated, not rounded."""
    hours = int(duration_ms // MS_PER_HOUR)
    minutes = int((duration_ms % MS_PER_HOUR) // MS_PER_MINUTE)
    return f"{hours} hrs {minutes} mins"


def format_money(money: Money | None) -> str:
    """Formats an amount as "<amount> <currency>", or N/A when there is none."""
    if money is None:
        return NOT_AVAILABLE
    return f"{_format_number(money.amount)} {money.currency}"


def format_emission(grams_per_km: float) -> str:
    """Formats a CO2 emission as "<value> g/km"."""
    return f"{_format_number(grams_per_km)} g/km"


def summarize_route(route: RouteCandidate) -> TripSummary:
    """Turns a route into the six display fields, in spreadsheet column order."""
    return TripSummary(
        distance=format_distance(route.distance_value, route.distance_unit),
        duration=format_duration(route.duration_ms),
        fuel_cost=format_money(route.fuel_cost),
        toll_cost=format_money(route.toll_cost),
        total_cost=format_money(route.total_cost),
        carbon_emission=format_emission(route.carbon_emission),
    )


# --- Core Logic ---

def select_fastest_route(routes: list[RouteCandidate]) -> RouteCandidate:
    """Returns the route with the shortest duration; the first one listed wins a tie."""
    if not routes:
        raise ProviderError("no routes to choose from")
    return min(routes, key=lambda route: route.duration_ms)


def _require_address(address, label: str) -> str:
    """Rejects a missing or blank address."""
    if not isinstance(address, str) or not address.strip():
        raise ConfigurationError(f"The {label} address is empty.")
    return address


def lookup(
    origin: str,
    destination: str,
    energy_cost: float = DEFAULT_ENERGY_COST,
    car_id: str = DEFAULT_CAR_ID,
    geocoder: Geocoder | None = None,
    router: MichelinAdapter | None = None,
) -> TripSummary:
    """
    Geocodes both addresses, asks ViaMichelin for the itinerary and
    returns the fastest route as six display strings:
    distance, duration, fuel cost, toll cost, total cost, carbon emission.

    Any failure raises a TripCostError subclass; there is no partial result.
    """
    _require_address(origin, "origin")
    _require_address(destination, "destination")
    options = ItineraryOptions(energy_cost=energy_cost, car_id=car_id)
    options.validate()

    geocoder = geocoder or GoogleMapsGeocoder()
    router = router or MichelinAdapter()

    origin_coords = geocoder.resolve(origin)
    destination_coords = geocoder.resolve(destination)

    routes = router.search_itinerary(
        origin_coords, destination_coords, origin, destination, options)
    return summarize_route(select_fastest_route(routes))


def display_summary(summary: TripSummary, origin: str, destination: str):
    """Prints the labelled summary and a tab-separated row for pasting into a spreadsheet."""
    print(f"\nFastest route from {origin} to {destination}:\n")
    width = max(len(label) for label in COLUMN_LABELS)
    for label, value in zip(COLUMN_LABELS, summary):
        print(f"  {label:<{width}} : {value}")
    print("\nSpreadsheet row (tab-separated):")
    print("\t".join(summary))


def main(argv=None):
    """Command-line entry point: asks for any missing address and prints the trip summary."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Trip Cost Lookup: distance, time, costs and CO2 for a car trip.")
    parser.add_argument('origin', nargs='?',
                        help="Starting address, e.g. 'Lisbon, PT'.")
    parser.add_argument('destination', nargs='?',
                        help="Destination address, e.g. 'Seville, ES'.")
    parser.add_argument('--energy-cost', type=float,
                        default=os.getenv("MICHELIN_ENERGY_COST", str(DEFAULT_ENERGY_COST)),
                        help="Energy cost per unit (litre or kWh). Default: %(default)s")
    parser.add_argument('--car-id',
                        default=os.getenv("MICHELIN_CAR_ID", DEFAULT_CAR_ID),
                        help="ViaMichelin car identifier. Default: %(default)s")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the exact API calls being made.")
    args = parser.parse_args(argv)

    origin = args.origin or input(
        "Enter the origin address [Default: Lisbon, PT]: ") or "Lisbon, PT"
    destination = args.destination or input(
        "Enter the destination address [Default: Seville, ES]: ") or "Seville, ES"

    try:
        summary = lookup(
            origin,
            destination,
            energy_cost=args.energy_cost,
            car_id=args.car_id,
            geocoder=GoogleMapsGeocoder(verbose=args.verbose),
            router=MichelinAdapter(verbose=args.verbose),
        )
    except TripCostError as e:
        print(e)
        sys.exit(1)

    display_summary(summary, origin, destination)


if __name__ == '__main__':
    main()
