"""Entry point for rendering a GEDCOM map from the command line.

Usage:
    python -m gedcom_map --gedcom-file /path/to/tree.ged -o map.html
    gedcom-map --gedcom-file /path/to/tree.ged
"""

import argparse
import logging
import os
import sys
from pathlib import Path

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
{head}
</head>
<body>
{body}
</body>
</html>
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Map births, marriages and deaths from a GEDCOM file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gedcom-map --gedcom-file ~/tree.ged
  gedcom-map -f ~/tree.ged -o family.html --no-network

Environment variables:
  GEDCOM_FILE           Path to GEDCOM file
  GOOGLE_MAPS_API_KEY   Use Google Maps instead of OpenStreetMap
  GEOCODE_CACHE_DIR     Where geocoding results are cached (default: ~/.cache/gedcom-map)
  NOMINATIM_USER_AGENT  User-Agent sent to Nominatim
""",
    )
    parser.add_argument(
        "--gedcom-file",
        "-f",
        metavar="PATH",
        help="Path to GEDCOM file (or set GEDCOM_FILE env var)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="PATH",
        default="map.html",
        help="HTML file to write (default: map.html)",
    )
    parser.add_argument(
        "--google-key",
        metavar="KEY",
        help="Google Maps API key (or set GOOGLE_MAPS_API_KEY env var)",
    )
    parser.add_argument(
        "--cache-dir",
        metavar="PATH",
        help="Geocode cache directory (or set GEOCODE_CACHE_DIR env var)",
    )
    parser.add_argument(
        "--no-network",
        action="store_true",
        help="Only use offline geocoders",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Log progress details")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the gedcom-map command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # CLI args override env vars
    if args.gedcom_file:
        os.environ["GEDCOM_FILE"] = args.gedcom_file
    if args.google_key:
        os.environ["GOOGLE_MAPS_API_KEY"] = args.google_key
    if args.cache_dir:
        os.environ["GEOCODE_CACHE_DIR"] = args.cache_dir

    from . import config, onload_render
    from .exceptions import ConfigurationError
    from .geocache import CACHE_FILENAME
    from .parsing import load_gedcom
    from .providers import build_geocoder
    from .telemetry import initialize_tracing

    config.configure()
    initialize_tracing()

    try:
        gedcom_path = config.resolve_gedcom_path()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cache_path = config.get_cache_dir() / CACHE_FILENAME
    geocoder = build_geocoder(
        cache_path,
        user_agent=config.get_nominatim_user_agent(),
        network=not args.no_network,
    )

    try:
        head, body = onload_render(
            load_gedcom(gedcom_path),
            geocoder,
            google_key=config.get_google_key(),
            debug=args.debug,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if geocoder.store is not None:
            try:
                geocoder.store.save(cache_path)
            except OSError as e:
                logging.getLogger(__name__).warning(f"Failed to save geocode cache: {e}")

    if not head and not body:
        print("Error: none of the events could be geocoded", file=sys.stderr)
        return 1

    output = Path(args.output)
    output.write_text(
        PAGE_TEMPLATE.format(title=gedcom_path.stem, head=head, body=body),
        encoding="utf-8",
    )
    print(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
