"""
OceanHost command line entry point.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from oceanhost.config.settings import get_settings
from oceanhost.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oceanhost", description="Publish applications to DigitalOcean App Platform"
    )
    parser.add_argument("--log-level", help="Log level (default: OCEANHOST_LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        help="Log output format (default: OCEANHOST_LOG_FORMAT or console)",
    )
    subparsers = parser.add_subparsers(dest="command")

    publish_parser = subparsers.add_parser(
        "publish", help="Generate app-spec.yaml and the doctl deploy script"
    )
    publish_parser.add_argument("apphost_file", help="Path to the app host Python file")
    publish_parser.add_argument("--output-dir", help="Output directory for generated files")

    regions_parser = subparsers.add_parser("regions", help="List or validate DigitalOcean regions")
    regions_parser.add_argument("--validate", metavar="SLUG", help="Datacenter slug to validate")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        (args.log_level or settings.log_level).upper(),
        log_format=args.log_format or settings.log_format,
    )

    if args.command == "publish":
        from oceanhost.cli.publish import publish_command

        sys.exit(publish_command(args.apphost_file, output_dir=args.output_dir))

    if args.command == "regions":
        from oceanhost.cli.regions import regions_command

        sys.exit(regions_command(validate=args.validate))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
