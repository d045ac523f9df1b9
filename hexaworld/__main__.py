"""Entry point for ``python -m hexaworld``.

Loads the YAML config, builds a simulation engine, and either opens a
Pygame window to watch the ecosystem or, with ``--headless``, runs a
fixed number of ticks and logs the population counts.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from hexaworld.fauna.base import Species
from hexaworld.simulation.config import SimulationConfig
from hexaworld.simulation.engine import SimulationEngine

logger = logging.getLogger("hexaworld")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

_REPORT_EVERY = 100


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="hexaworld",
        description="Hexaworld - hexagonal predator-prey ecosystem",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=10.0,
        help="Simulation ticks per second (default: 10)",
    )
    parser.add_argument(
        "--headless",
        type=int,
        metavar="TICKS",
        default=None,
        help="Run TICKS ticks without a window and log population counts",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def _format_counts(engine: SimulationEngine) -> str:
    counts = engine.counts()
    return ", ".join(f"{s.value}={counts[s]}" for s in Species)


def run_headless(engine: SimulationEngine, ticks: int) -> None:
    """Step ``engine`` for ``ticks`` ticks, logging counts periodically."""
    for _ in range(ticks):
        engine.step()
        if engine.tick % _REPORT_EVERY == 0:
            logger.info("Tick %d: %s", engine.tick, _format_counts(engine))
    logger.info("Finished after %d ticks: %s", engine.tick, _format_counts(engine))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, then run headless or launch renderer."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    engine = SimulationEngine(config=config)

    if args.headless is not None:
        run_headless(engine, args.headless)
        return

    from hexaworld.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(engine=engine, ticks_per_second=args.speed)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
