"""Configuration loader for rust2luau."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rust2luau.args import Args
from rust2luau.config import TranspilerConfig
from rust2luau.log import get_logger

logger = get_logger(__name__)

CONFIG_DIR_NAME = ".rust2luau"
CONFIG_FILE_NAME = "config.toml"


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """Read a single TOML config file.

    Args:
        config_path: Path to the config file.

    Returns:
        Parsed table, or an empty dict if the file is missing or unreadable.

    """
    if not config_path.exists():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Failed to load config %s: %s", config_path, e)
        return {}


def _cli_overrides(args: Args) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.indent is not None:
        overrides["indent_width"] = args.indent
    if args.tabs:
        overrides["use_tabs"] = True
    if args.source_comments:
        overrides["source_comments"] = True
    return overrides


def load_config(args: Args) -> TranspilerConfig:
    """Load translation settings with priority: CLI > local > global > defaults.

    Args:
        args: Parsed command line arguments

    Returns:
        Validated translation settings.

    Raises:
        ValidationError: If the command line overrides are invalid.

    """
    global_config_path = Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    local_config_path = args.working_dir / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    settings: dict[str, Any] = {}
    for config_path in (global_config_path, local_config_path):
        file_settings = _read_config_file(config_path)
        if not file_settings:
            continue
        try:
            TranspilerConfig.model_validate(file_settings)
        except ValidationError as e:
            logger.debug("Ignoring invalid config %s: %s", config_path, e)
            continue
        settings.update(file_settings)

    settings.update(_cli_overrides(args))
    config = TranspilerConfig.model_validate(settings)
    logger.debug("Using configuration: %s", config)
    return config
