"""Python-standard logging configuration for shorthand-codegen.

Logging is set up with logging.config.dictConfig() from YAML files shipped
in the package's ``config/`` directory.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from importlib.resources import files
from pathlib import Path
from typing import Any, cast

import yaml


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def get_config_dir() -> Path:
    """Directory holding the packaged logging configurations."""
    return Path(str(files("shorthand_codegen") / "config"))


def get_config_path(config_name: str | None = None) -> Path:
    """Get the path to a logging configuration file.

    Args:
        config_name: Name of config file (without extension); the
            ``SHORTHAND_CODEGEN_LOG_CONFIG`` environment variable may name
            an explicit file instead

    Returns:
        Path to the logging configuration file

    Raises:
        LoggingError: If no suitable configuration file is found

    """
    env_override = os.getenv("SHORTHAND_CODEGEN_LOG_CONFIG")
    if env_override and config_name is None:
        config_path = Path(env_override).expanduser()
    else:
        config_path = get_config_dir() / f"{config_name or 'logging'}.yaml"

    if not config_path.exists():
        raise LoggingError(
            f"No logging configuration found. Expected at: {config_path}"
        )

    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Logging configuration dictionary

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise LoggingError(f"Invalid configuration format in {config_path}")

        return cast(dict[str, Any], config)

    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force_basic: Force basic console logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or "INFO")
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path()

        config = load_config(config_path)

        if level:
            numeric_level = getattr(logging, level.upper(), None)
            if not isinstance(numeric_level, int):
                raise LoggingError(f"Invalid log level: {level}")

            for logger_name in config.get("loggers", {}):
                config["loggers"][logger_name]["level"] = level.upper()

            # Handlers filter below their own level, so lower them too
            for handler_name, handler_config in config.get("handlers", {}).items():
                if isinstance(handler_config, dict) and "level" in handler_config:
                    handler_level_str = cast(str, handler_config["level"])
                    current_handler_level = getattr(
                        logging, handler_level_str, logging.INFO
                    )
                    if numeric_level < current_handler_level:
                        config["handlers"][handler_name]["level"] = level.upper()

        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        logger.debug("Logging configured from: %s", config_path)

    except (LoggingError, KeyError, ValueError, TypeError) as e:
        fallback_level = level or "INFO"
        _setup_basic_logging(fallback_level)

        fallback_logger = logging.getLogger(__name__)
        fallback_logger.warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic console logging as fallback."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
