"""Command line utility for running the sand simulation headless."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Dict, List, Optional, Sequence

from .config import SimulationConfig
from .config import load_config
from .logic import ELEMENTS
from .runtime import SandSimulation

LOGGER_NAME = "sandbox.main"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
DEFAULT_TICKS = 100
DEFAULT_REPORT_INTERVAL = 10

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the headless runner."""
    parser = argparse.ArgumentParser(
        description="Run the falling sand simulation without a display."
    )
    parser.add_argument(
        "--config",
        help="Path to a JSON configuration file merged over the defaults.",
    )
    parser.add_argument("--width", type=int, help="Grid width in cells.")
    parser.add_argument("--height", type=int, help="Grid height in cells.")
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed; identical seeds and paint commands reproduce a run.",
    )
    parser.add_argument(
        "--dispersion-rate",
        dest="dispersion_rate",
        type=int,
        help="How many cells a liquid or gas may flow sideways per tick.",
    )
    parser.add_argument(
        "--diffusion-rate",
        dest="diffusion_rate",
        type=float,
        help="Probability that blocked gas attempts to spread sideways.",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=DEFAULT_TICKS,
        help="Number of ticks to simulate.",
    )
    parser.add_argument(
        "--paint",
        action="append",
        nargs=3,
        default=[],
        metavar=("ELEMENT", "X", "Y"),
        help="Place an element on one cell before the run. Repeatable.",
    )
    parser.add_argument(
        "--line",
        action="append",
        nargs=5,
        default=[],
        metavar=("ELEMENT", "X0", "Y0", "X1", "Y1"),
        help="Paint a straight line of an element before the run. Repeatable.",
    )
    parser.add_argument(
        "--report-interval",
        dest="report_interval",
        type=int,
        default=DEFAULT_REPORT_INTERVAL,
        help="Log the element population every N ticks (0 disables).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final snapshot as JSON on stdout.",
    )
    parser.add_argument(
        "--list-elements",
        dest="list_elements",
        action="store_true",
        help="Print the element catalog and exit.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=LOG_LEVELS,
        help="Logging verbosity for the utility output.",
    )
    return parser.parse_args(argv)


def configure_logging(log_level: str) -> logging.Logger:
    """Configure the root logger and return the module logger."""
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return logging.getLogger(LOGGER_NAME)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Apply command line overrides on top of the loaded configuration."""
    config = load_config(args.config)
    overrides: Dict[str, object] = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.dispersion_rate is not None:
        overrides["dispersion_rate"] = args.dispersion_rate
    if args.diffusion_rate is not None:
        overrides["diffusion_rate"] = args.diffusion_rate
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def apply_paint_commands(
    simulation: SandSimulation,
    points: List[List[str]],
    lines: List[List[str]],
    logger: logging.Logger,
) -> None:
    """Paint the requested cells and lines onto the fresh grid."""
    for element_name, x, y in points:
        simulation.paint(_parse_int(x), _parse_int(y), element_name)
    for element_name, x0, y0, x1, y1 in lines:
        painted = simulation.paint_line(
            (_parse_int(x0), _parse_int(y0)),
            (_parse_int(x1), _parse_int(y1)),
            element_name,
        )
        logger.debug("Painted %s cell(s) of %s", painted, element_name)


def log_population(logger: logging.Logger, simulation: SandSimulation) -> None:
    """Write the current element counts to the logger."""
    population = simulation.population()
    if not population:
        logger.info("Tick %s: grid is empty.", simulation.tick)
        return
    summary = ", ".join(f"{name}={count}" for name, count in sorted(population.items()))
    logger.info("Tick %s: %s", simulation.tick, summary)


def list_elements() -> None:
    """Print each catalog element as a JSON line."""
    for element in ELEMENTS:
        print(element.to_json())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the headless simulation utility."""
    args = parse_arguments(argv)
    logger = configure_logging(args.log_level)

    if args.list_elements:
        list_elements()
        return EXIT_OK

    try:
        config = build_config(args)
        if args.ticks < 0:
            raise ValueError("--ticks must be non-negative")
        simulation = SandSimulation.from_config(config, log_callback=logger.debug)
        apply_paint_commands(simulation, args.paint, args.line, logger)
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Unable to start simulation: %s", exc)
        return EXIT_CONFIG_ERROR

    logger.info(
        "Running %s tick(s) on a %sx%s grid.", args.ticks, config.width, config.height
    )
    interval = args.report_interval if args.report_interval > 0 else args.ticks
    remaining = args.ticks
    try:
        while remaining > 0:
            chunk = min(interval, remaining)
            simulation.run(chunk)
            remaining -= chunk
            if args.report_interval > 0:
                log_population(logger, simulation)
    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user at tick %s", simulation.tick)

    if args.report_interval <= 0 or args.ticks == 0:
        log_population(logger, simulation)
    if args.json:
        print(simulation.snapshot().to_json())
    return EXIT_OK


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Expected an integer coordinate, got {value!r}") from exc


if __name__ == "__main__":
    sys.exit(main())
