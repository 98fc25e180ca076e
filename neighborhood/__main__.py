"""Entry point for ``python -m neighborhood``.

Loads the default YAML config, applies command-line overrides, builds
the simulation engine and animates the neighborhood in the terminal (or
in a Pygame window with ``--viewer pygame``).

Out-of-bounds access and a full grid are programming errors: they are
reported on stderr and end the process with status 1.
"""

from __future__ import annotations

import argparse
import pathlib
import sys

from neighborhood.simulation.config import SimulationConfig
from neighborhood.simulation.engine import SimulationEngine
from neighborhood.utils.logger import get_logger, set_level
from neighborhood.world.grid import NoEmptyCellError, OutOfBoundsError

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = get_logger("neighborhood.cli")


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="neighborhood",
        description="Neighborhood - Schelling-style segregation animation",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument("--frames", type=int, help="Number of frames to animate")
    parser.add_argument("--width", type=int, help="Grid columns")
    parser.add_argument("--height", type=int, help="Grid rows")
    parser.add_argument(
        "--fill-ratio",
        type=float,
        help="Fraction of cells holding a shape at start",
    )
    parser.add_argument(
        "--min-alike",
        type=float,
        help="Like-kind neighbour fraction a shape needs to stay put",
    )
    parser.add_argument("--seed", type=int, help="RNG seed for a reproducible run")
    parser.add_argument(
        "--delay-ms",
        type=int,
        help="Pause between frames in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--viewer",
        choices=("terminal", "pygame"),
        default="terminal",
        help="Where to draw frames (default: terminal)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity on stderr (default: INFO)",
    )
    return parser


def load_config(args: argparse.Namespace) -> SimulationConfig:
    """Read the YAML config and apply command-line overrides."""
    if args.config.exists():
        config = SimulationConfig.from_yaml(args.config)
    else:
        logger.warning("Config %s not found, using defaults", args.config)
        config = SimulationConfig()

    overrides = {
        "frames": args.frames,
        "width": args.width,
        "height": args.height,
        "fill_ratio": args.fill_ratio,
        "min_alike": args.min_alike,
        "seed": args.seed,
        "frame_delay_ms": args.delay_ms,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    config.validate()
    return config


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, run the animation."""
    args = build_parser().parse_args(argv)
    set_level(args.log_level)

    try:
        config = load_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    try:
        engine = SimulationEngine(config=config)
        if args.viewer == "pygame":
            from neighborhood.ui.pygame_client import PygameViewer

            viewer = PygameViewer()
            try:
                engine.run(buffer_factory=viewer.buffer, stop=viewer.should_stop)
            finally:
                viewer.close()
        else:
            engine.run()
    except (OutOfBoundsError, NoEmptyCellError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
