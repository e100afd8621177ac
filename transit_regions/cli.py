"""
Command Line Interface

Entry point for running the region resolver from the command line.

Usage:
    python -m transit_regions list
    python -m transit_regions closest 47.6097 -122.3331
    python -m transit_regions contains 1 47.6097 -122.3331
    python -m transit_regions refresh
    python -m transit_regions serve --port 8000
"""

import argparse
import logging
import sys
from datetime import datetime

from .config import API_HOST, API_PORT
from .config_manager import RegionsConfig
from .exceptions import RegionsError
from .geo import meters_to_miles, nearest_bound_distance
from .resolver import RegionResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit-regions",
        description="Transit region discovery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m transit_regions list
  python -m transit_regions list --refresh
  python -m transit_regions closest 47.6097 -122.3331
  python -m transit_regions --experimental closest 27.9506 -82.4572
  python -m transit_regions contains 1 47.6097 -122.3331
  python -m transit_regions serve --port 8080
        """
    )

    # Global options
    parser.add_argument(
        "--db",
        help="Path of the local region store (default: ~/.transit_regions/regions.db)"
    )
    parser.add_argument(
        "--url",
        help="Regions API URL"
    )
    parser.add_argument(
        "--bundled",
        help="Path of the bundled fallback regions file"
    )
    parser.add_argument(
        "--experimental",
        action="store_true",
        default=None,
        help="Include experimental regions"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only show warnings and errors"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List known regions")
    list_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Force a reload from the regions server"
    )

    closest_parser = subparsers.add_parser("closest", help="Find the closest usable region")
    closest_parser.add_argument("lat", type=float, help="Latitude")
    closest_parser.add_argument("lon", type=float, help="Longitude")
    closest_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Force a reload from the regions server"
    )

    contains_parser = subparsers.add_parser("contains", help="Check if a location is within a region")
    contains_parser.add_argument("region_id", type=int, help="Region id")
    contains_parser.add_argument("lat", type=float, help="Latitude")
    contains_parser.add_argument("lon", type=float, help="Longitude")

    subparsers.add_parser("refresh", help="Reload regions from the server and update the store")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", default=API_HOST, help=f"Bind host (default: {API_HOST})")
    serve_parser.add_argument("--port", type=int, default=API_PORT, help=f"Bind port (default: {API_PORT})")

    return parser


def configure_logging(verbose: bool, quiet: bool):
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _print_region(region, prefix=""):
    flags = []
    if region.experimental:
        flags.append("experimental")
    if not region.active:
        flags.append("inactive")
    suffix = f" [{', '.join(flags)}]" if flags else ""
    print(f"{prefix}{region.id:>4}  {region.name}{suffix}")
    if region.oba_base_url:
        print(f"{prefix}      {region.oba_base_url}")


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = RegionsConfig(
            regions_url=args.url,
            database_path=args.db,
            bundled_path=args.bundled,
            experimental_regions=args.experimental,
            server_host=getattr(args, "host", API_HOST),
            server_port=getattr(args, "port", API_PORT),
        )
        resolver = RegionResolver(config=config)

        with resolver:
            if args.command == "list":
                regions = resolver.regions(force_reload=args.refresh)
                for region in regions:
                    _print_region(region)
                print(f"\n{len(regions)} regions (from {resolver.manager.origin.value})")

            elif args.command == "closest":
                resolver.regions(force_reload=args.refresh)
                region = resolver.closest_region(args.lat, args.lon)
                if region is None:
                    print("No usable region found near this location.")
                    return 1
                _print_region(region)
                dist = nearest_bound_distance(region, args.lat, args.lon)
                print(f"      {meters_to_miles(dist):.1f} miles away")

            elif args.command == "contains":
                inside = resolver.contains(args.region_id, args.lat, args.lon)
                if inside is None:
                    print(f"Unknown region id: {args.region_id}", file=sys.stderr)
                    return 1
                print("inside" if inside else "outside")
                return 0 if inside else 2

            elif args.command == "refresh":
                regions = resolver.regions(force_reload=True)
                print(f"Loaded {len(regions)} regions from {resolver.manager.origin.value}.")
                if resolver.last_update_time is not None:
                    updated = datetime.fromtimestamp(resolver.last_update_time)
                    print(f"Last server update: {updated.isoformat(timespec='seconds')}")

            elif args.command == "serve":
                from .server import run_server
                run_server(resolver=resolver)

        return 0

    except RegionsError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
