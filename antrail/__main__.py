"""Entry point for ``python -m antrail``.

Loads the YAML config, builds a simulation and either opens a Pygame
window to watch the ants forage or, with ``--headless``, runs a fixed
number of ticks and logs a summary.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib
import sys

from antrail.simulation.config import ConfigError, SimulationConfig
from antrail.simulation.engine import Simulation

log = logging.getLogger("antrail")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="antrail",
        description="antrail - pheromone trail foraging simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to YAML config file (default: config/default.yaml if present)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=None,
        help="Pixels per grid cell on both axes",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and log a summary",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=1000,
        help="Ticks to run in headless mode (default: 1000)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Target frames per second (default: 60)",
    )
    parser.add_argument(
        "--updates-per-frame",
        type=int,
        default=None,
        help="Simulation ticks per displayed frame (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def load_config(args: argparse.Namespace) -> SimulationConfig:
    """Load the config file named on the command line and apply overrides."""
    path = args.config
    if path is None and _DEFAULT_CONFIG.exists():
        path = _DEFAULT_CONFIG
    config = SimulationConfig() if path is None else SimulationConfig.from_yaml(path)

    overrides: dict[str, int] = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.scale is not None:
        overrides["scale_x"] = args.scale
        overrides["scale_y"] = args.scale
    return dataclasses.replace(config, **overrides)


def run_headless(simulation: Simulation, ticks: int) -> None:
    """Advance ``ticks`` ticks, logging progress every tenth of the run."""
    report_every = max(1, ticks // 10)
    for _ in range(ticks):
        simulation.update()
        if simulation.tick % report_every == 0:
            stats = simulation.stats()
            log.info(
                "tick=%d delivered=%d carrying=%d food_left=%d trail_cells=%d",
                stats.tick,
                stats.food_delivered,
                stats.ants_carrying,
                stats.food_remaining,
                stats.pheromone_cells,
            )


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, create the simulation, run it.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        simulation = Simulation(config=load_config(args))
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    if args.headless:
        run_headless(simulation, args.ticks)
        return 0

    from antrail.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        simulation=simulation,
        updates_per_frame=args.updates_per_frame,
    )
    renderer.run(fps=args.fps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
