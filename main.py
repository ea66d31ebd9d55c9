# main.py
import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

import structlog
import yaml

from utils.config_loader import load_yaml_config
from utils.logging_utils import LOG_LEVELS, parse_log_level, setup_logging

from cavemap.config import GeneratorConfig
from cavemap.errors import CaveMapError
from cavemap.pipeline import CaveMosaicResult, generate_cave_mosaic
from cavemap.render import render_ascii, save_image
from cavemap.world.cave import StepSink
from cavemap.world.grid import BinaryGrid

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIG = 2

log = structlog.get_logger()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a cellular-automata cave, render it as a Voronoi mosaic and mark treasures."
    )
    parser.add_argument("--config", type=Path, default=CONFIG_FILE, help="YAML settings file.")
    parser.add_argument("--seed", type=int, help="Seed for every stage (default: from config).")
    parser.add_argument("--width", type=int, help="Map width in cells.")
    parser.add_argument("--height", type=int, help="Map height in cells.")
    parser.add_argument("--steps", type=int, help="Number of automaton steps.")
    parser.add_argument("--regions", type=int, help="Number of Voronoi regions.")
    parser.add_argument("--mode", choices=["mean", "mode"], help="Region fill color aggregation.")
    parser.add_argument("--treasures", type=int, help="Number of treasure markers.")
    parser.add_argument("--cross-size", type=int, help="Marker half-width in pixels.")
    parser.add_argument("--output-dir", help="Folder for the PNG files.")
    parser.add_argument("--show-steps", action="store_true", help="Print every automaton step.")
    parser.add_argument("--no-save", action="store_true", help="Skip writing PNG files.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO", help="Logging level")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")
    return parser


def load_generator_config(args: argparse.Namespace) -> GeneratorConfig:
    """Read the YAML settings and apply command line overrides on top."""
    config = GeneratorConfig.from_mapping(load_yaml_config(args.config, "Generator"))
    use_mean = None if args.mode is None else args.mode == "mean"
    config = config.with_overrides(
        seed=args.seed,
        width=args.width,
        height=args.height,
        number_of_steps=args.steps,
        region_amount=args.regions,
        use_mean_color=use_mean,
        number_of_treasures=args.treasures,
        cross_size=args.cross_size,
        output_dir=args.output_dir,
        show_intermediate_steps=True if args.show_steps else None,
    )
    return config.validate()


def make_step_printer(delay: float, out=None) -> StepSink:
    """Sink that prints each intermediate grid and then waits ``delay`` seconds."""
    out = out if out is not None else sys.stdout

    def _print_step(step_number: int, grid: BinaryGrid) -> None:
        print(f"\n--- Step {step_number} ---", file=out)
        print(render_ascii(grid), file=out)
        if delay > 0:
            time.sleep(delay)

    return _print_step


def save_outputs(result: CaveMosaicResult, config: GeneratorConfig) -> List[Path]:
    output_dir = Path(config.output_dir)
    return [
        save_image(result.cave_image, output_dir / config.cave_file),
        save_image(result.mosaic, output_dir / config.mosaic_file),
        save_image(result.final, output_dir / config.output_file),
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_arg_parser().parse_args(argv)
    setup_logging(
        parse_log_level(args.log_level, args.verbose),
        colors=False if args.no_color else None,
    )
    log.info("Application starting...", config=str(args.config))

    try:
        config = load_generator_config(args)
        on_step = (
            make_step_printer(config.step_delay)
            if config.show_intermediate_steps
            else None
        )
        result = generate_cave_mosaic(config, on_step=on_step)
        if args.no_save:
            log.info("Skipping image output (--no-save)")
        else:
            paths = save_outputs(result, config)
            log.info("Images written", files=[str(p) for p in paths])
    except (CaveMapError, FileNotFoundError, yaml.YAMLError) as e:
        log.error("Generation rejected", error=str(e))
        return EXIT_BAD_CONFIG
    except Exception as e:
        log.critical("Unhandled exception during generation", error=str(e), exc_info=True)
        return EXIT_FAILURE

    log.info("Treasures marked", spots=[tuple(p) for p in result.treasures])
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
