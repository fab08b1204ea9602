# ruff: noqa: T201

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from sqlalchemy.orm import registry

from countercache.app import build_counter_cache
from countercache.config import ConfigurationError, configure_logging, get_counter_cache_config
from countercache.domain.registry import CounterRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from countercache.app import ResolutionReport

log = logging.getLogger(__name__)


class CliUsageError(Exception):
    """Raised for invalid command line input."""


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect counter cache resolution")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect = subparsers.add_parser(
        "inspect",
        help="Show which counter attribute each has-many relationship resolves to",
    )
    inspect.add_argument("module", help="Importable module declaring the mapped classes")
    inspect.add_argument(
        "--mappers",
        default="mapper_registry",
        help="Name of the SQLAlchemy registry in MODULE (default: %(default)s)",
    )
    inspect.add_argument(
        "--counters",
        default="counters",
        help="Name of the CounterRegistry in MODULE (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def _load_sources(args: argparse.Namespace) -> tuple[registry, CounterRegistry]:
    try:
        module = importlib.import_module(args.module)
    except ImportError as exc:
        raise CliUsageError(f"Cannot import {args.module}: {exc}") from exc

    mappers = getattr(module, args.mappers, None)
    if not isinstance(mappers, registry):
        raise CliUsageError(f"{args.module}.{args.mappers} is not a SQLAlchemy registry")
    counters = getattr(module, args.counters, None)
    if not isinstance(counters, CounterRegistry):
        raise CliUsageError(f"{args.module}.{args.counters} is not a CounterRegistry")
    return mappers, counters


def _format_reports(reports: Sequence[ResolutionReport]) -> list[str]:
    rows = [
        (f"{report.owner}.{report.relationship}", report.attribute, report.source.value)
        for report in reports
    ]
    if not rows:
        return ["No has-many relationships found"]
    widths = [max(len(row[index]) for row in rows) for index in range(2)]
    return [
        f"{name:<{widths[0]}}  {attribute:<{widths[1]}}  {source}"
        for name, attribute, source in rows
    ]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""

    load_dotenv()
    try:
        config = get_counter_cache_config()
        configure_logging(level=config.log_level, sql_echo=config.sql_echo)
        args = _parse_args(argv if argv is not None else sys.argv[1:])
        mappers, counters = _load_sources(args)
    except (CliUsageError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    log.debug("Inspecting %s", args.module)
    cache = build_counter_cache(mappers, counters, config=config)
    for line in _format_reports(cache.describe()):
        print(line)


if __name__ == "__main__":
    main()
