"""
Configuration loading utility for DocPipe.

This module provides a function to safely load and validate a YAML
configuration file.
"""

import yaml
from pathlib import Path
import logging
from pydantic import ValidationError

from .config_models import ProjectConfig
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> dict:
    """
    Loads and validates a YAML configuration file from the specified path.

    Args:
        config_path (str): The path to the YAML configuration file.

    Returns:
        dict: The validated configuration, with defaults filled in.

    Raises:
        ConfigurationError: If the file is missing, empty, unreadable, not
            valid YAML or fails validation.
    """
    path = Path(config_path)
    if not path.is_file():
        logger.error(f"Configuration file not found or is not a file: '{path}'")
        raise ConfigurationError(f"Configuration file not found: '{path}'")

    logger.debug(f"Attempting to load and validate configuration from: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (yaml.YAMLError, IOError) as e:
        logger.error(f"Error reading or parsing YAML file '{path}': {e}", exc_info=True)
        raise ConfigurationError(f"Could not read configuration '{path}': {e}") from e

    if not config:
        logger.error(f"Configuration file is empty: '{path}'")
        raise ConfigurationError(f"Configuration file is empty: '{path}'")

    try:
        validated = ProjectConfig.model_validate(config)
    except ValidationError as e:
        # Pydantic provides detailed, user-friendly error messages.
        logger.error(f"Configuration validation failed:\n{e}")
        raise ConfigurationError(f"Invalid configuration '{path}':\n{e}") from e

    logger.info(f"Successfully loaded and validated configuration from: '{path}'")
    return validated.model_dump()
