"""Plan a route through a ski area from the command line.

Reads a features file of the form {"pistes": [...], "lifts": [...]} (the
dict layout accepted by PisteFeature.from_dict / LiftFeature.from_dict),
builds the navigation graph and prints the itinerary.

Endpoints are node IDs (e.g. "piste_top-p1", "lift_station-l1-0") or
"lat,lon" coordinates, which snap to the closest node.

Usage:
    python scripts/plan_route.py resort.json piste_top-p1 piste_bottom-p2 --difficulties easy,expert
    python scripts/plan_route.py resort.json 46.90,10.99 46.88,10.97 --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from skiresort_navigator.model.difficulty import format_difficulty_filter, parse_difficulty_filter
from skiresort_navigator.model.features import LiftFeature, PisteFeature
from skiresort_navigator.model.route import Route
from skiresort_navigator.routing.route_planner import RoutePlanner

logger = logging.getLogger(__name__)


def load_features(path: Path) -> tuple[list[PisteFeature], list[LiftFeature]]:
    """Load piste and lift features from a JSON file."""
    with open(path, "r", encoding="utf-8") as fh:
        data: dict[str, Any] = json.load(fh)
    pistes = [PisteFeature.from_dict(item) for item in data.get("pistes", [])]
    lifts = [LiftFeature.from_dict(item) for item in data.get("lifts", [])]
    logger.info(f"Loaded {len(pistes)} pistes and {len(lifts)} lifts from {path}")
    return pistes, lifts


def parse_coordinates(text: str) -> Optional[tuple[float, float]]:
    """Parse "lat,lon" text. None if the text is not a coordinate pair."""
    parts = text.split(",")
    if len(parts) != 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None


def resolve_endpoint(planner: RoutePlanner, text: str) -> Optional[str]:
    """Turn a node ID or "lat,lon" text into a node ID."""
    if text in planner.graph:
        return text
    coords = parse_coordinates(text)
    if coords is None:
        return None
    node = planner.graph.find_closest_node(lat=coords[0], lon=coords[1])
    return node.id if node else None


def format_route(route: Route) -> str:
    """Human-readable itinerary."""
    lines = [f"{route.from_location.name} -> {route.to_location.name}"]
    for number, step in enumerate(route.steps, start=1):
        label = step.difficulty.value if step.difficulty else step.kind
        lines.append(
            f"  {number}. {step.name} ({label}): {step.distance_m:.0f}m, {step.elevation_change_m:+.0f}m elevation"
        )
    hardest = route.max_difficulty.value if route.max_difficulty else "none"
    lines.append(
        f"Total: {route.total_distance_m:.0f}m, -{route.total_elevation_down_m:.0f}m / "
        f"+{route.total_elevation_up_m:.0f}m, {route.lift_count} lifts, "
        f"~{route.estimated_minutes} min, hardest piste: {hardest}"
    )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find a route between two points of a ski area.")
    parser.add_argument("features", type=Path, help="JSON file with 'pistes' and 'lifts' lists")
    parser.add_argument("origin", help="Origin node ID or 'lat,lon'")
    parser.add_argument("destination", help="Destination node ID or 'lat,lon'")
    parser.add_argument(
        "--difficulties",
        default=None,
        help="Comma-separated allowed difficulties (e.g. 'easy,intermediate'); all if omitted",
    )
    parser.add_argument("--json", action="store_true", help="Print the route as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Returns:
        0 if a route was printed, 1 if no route exists, 2 for unusable endpoints.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pistes, lifts = load_features(path=args.features)
    planner = RoutePlanner(pistes=pistes, lifts=lifts)
    difficulties = parse_difficulty_filter(args.difficulties)

    from_id = resolve_endpoint(planner=planner, text=args.origin)
    to_id = resolve_endpoint(planner=planner, text=args.destination)
    if from_id is None or to_id is None:
        unknown = args.origin if from_id is None else args.destination
        print(f"Unknown location: {unknown}", file=sys.stderr)
        return 2

    route = planner.plan(from_id=from_id, to_id=to_id, difficulties=difficulties)
    if route is None:
        allowed = format_difficulty_filter(difficulties) or "all difficulties"
        print(f"No route from {from_id} to {to_id} with {allowed}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(route.to_dict(), indent=2))
    else:
        print(format_route(route))
    return 0


if __name__ == "__main__":
    sys.exit(main())
