"""Command-line entry point: build the registry, fetch one backend, print the result."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .exceptions import ConfigError, UnknownBackendError
from .log_setup import setup_logger
from .models import Condition, Data
from .registry import build_registry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather backend CLI arguments."""
    parser = argparse.ArgumentParser(description="Fetch weather from a registered backend.")
    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        help="Backend name (defaults to WEATHER_BACKEND).",
    )
    parser.add_argument(
        "--location",
        type=str,
        default="",
        help="Label for the requested location; the backend's configured coordinates are used.",
    )
    parser.add_argument("--days", type=int, default=3, help="Number of forecast days to show.")
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="Print registered backend names and exit.",
    )
    return parser.parse_args(argv)


def _fmt(value: float | int | None, unit: str = "") -> str:
    if value is None:
        return "-"
    return f"{value:g}{unit}"


def _condition_row(condition: Condition) -> list[str]:
    return [
        condition.time.isoformat(timespec="minutes") if condition.time else "-",
        condition.desc or condition.code,
        _fmt(condition.temp_c, " C"),
        _fmt(condition.feels_like_c, " C"),
        _fmt(condition.humidity, "%"),
        _fmt(condition.windspeed_kmph, " km/h"),
        _fmt(condition.precip_mm_per_hour, " mm/h"),
    ]


def _print_data(console: Console, backend: str, data: Data) -> None:
    geo = data.geo_location
    coords = f"({geo.latitude:.4f}, {geo.longitude:.4f})" if geo else "unknown"
    console.print(f"Backend={backend} location={data.location or '-'} coords={coords}")

    columns = ["Time", "Sky", "Temp", "Feels", "Humidity", "Wind", "Precip"]
    current = Table(title="Current Conditions")
    for column in columns:
        current.add_column(column)
    current.add_row(*_condition_row(data.current))
    console.print(current)

    if not data.forecast:
        console.print("No forecast slots returned.")
        return
    for day in data.forecast:
        table = Table(title=f"Forecast {day.local_date.isoformat()}")
        for column in columns:
            table.add_column(column)
        for slot in day.slots:
            table.add_row(*_condition_row(slot))
        console.print(table)


def run(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Fetch from the selected backend; returns the process exit code."""
    logger = setup_logger(level=settings.log_level)
    registry = build_registry(logger=logger)
    try:
        if args.list_backends:
            for name in registry.names():
                console.print(name)
            return 0

        name = args.backend or settings.weather_backend
        try:
            backend = registry.get(name)
        except UnknownBackendError as exc:
            logger.error("%s", exc)
            return 2

        if args.days <= 0:
            logger.error("--days must be > 0.")
            return 2

        registry.setup_all(settings)
        result = backend.fetch(args.location, args.days)
        if not result.ok:
            logger.error("Backend %s failed: %s", name, result.error, extra={"backend": name})
            return 1
        _print_data(console, name, result.data)
        return 0
    finally:
        registry.close()


def main(argv: list[str] | None = None) -> int:
    """Run a single weather fetch."""
    args = parse_args(argv)
    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logger().error("Configuration failure: %s", exc)
        return 2
    return run(args, settings, Console())


if __name__ == "__main__":
    sys.exit(main())
