# main.py
import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
import yaml

from dungeon import GenerationError, GeneratorConfig, generate
from game_rng import GameRNG
from utils.logging_utils import parse_log_level, setup_logging

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

EXIT_OK = 0
EXIT_GENERATION_FAILED = 1
EXIT_NOT_CONNECTED = 2

log = structlog.get_logger()


# --- Config Loading Helpers ---
def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a generic YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(f"{config_name} configuration file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
        if config_data is None:
            log.warning(f"{config_name} config file is empty.", path=str(config_path))
            return {}
        if not isinstance(config_data, dict):
            log.error(f"{config_name} config is not a mapping", path=str(config_path))
            raise ValueError(f"{config_name} configuration must be a mapping: {config_path}")
        log.info(f"{config_name} config loaded", path=str(config_path))
        return config_data
    except yaml.YAMLError as e:
        log.error(f"Error parsing YAML for {config_name}", path=str(config_path), error=str(e))
        raise


@dataclass
class Settings:
    width: int
    height: int
    seed: int
    log_level: int
    json_logs: bool
    generation: GeneratorConfig


def resolve_settings(config: Dict[str, Any], args: argparse.Namespace) -> Settings:
    """Merge the YAML config with command line overrides."""
    seed_cfg = args.seed if args.seed is not None else config.get("dungeon_seed")
    seed = int(time.time() * 1000) if seed_cfg is None else int(seed_cfg)
    log_level = (
        logging.DEBUG
        if args.verbose
        else parse_log_level(args.log_level or config.get("log_level"))
    )
    return Settings(
        width=int(args.width if args.width is not None else config.get("map_width", 80)),
        height=int(args.height if args.height is not None else config.get("map_height", 40)),
        seed=seed,
        log_level=log_level,
        json_logs=bool(config.get("json_logs", False)),
        generation=GeneratorConfig.from_mapping(config.get("generation")),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a rooms-and-corridor dungeon level.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for GameRNG (default: config or time-based)")
    parser.add_argument("--width", type=int, default=None, help="Level width in cells")
    parser.add_argument("--height", type=int, default=None, help="Level height in cells")
    parser.add_argument("--config", type=Path, default=CONFIG_FILE, help="Path to the YAML config")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # Configure early so config loading is logged; the config may refine it.
    setup_logging(logging.DEBUG if args.verbose else parse_log_level(args.log_level))
    try:
        config = load_yaml_config(args.config, "Main")
        settings = resolve_settings(config, args)
    except (OSError, yaml.YAMLError, ValueError) as e:
        log.error("Could not load configuration", error=str(e))
        return EXIT_GENERATION_FAILED

    setup_logging(settings.log_level, json_logs=settings.json_logs)
    log.info("Generating level", width=settings.width, height=settings.height, seed=settings.seed)

    rng = GameRNG(seed=settings.seed)
    try:
        level = generate(rng, settings.width, settings.height, config=settings.generation)
    except (GenerationError, ValueError) as e:
        log.error("Level generation failed", error=str(e), seed=settings.seed)
        return EXIT_GENERATION_FAILED

    print("\n".join(level.grid.to_str_lines(marker=level.start)))
    print(f"Start: {level.start}  Seed: {settings.seed}")
    if not level.connected:
        log.warning("Level generated without a corridor", seed=settings.seed)
        return EXIT_NOT_CONNECTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
