"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import LOG_LEVELS, MoiIdConfig

logger = logging.getLogger(__name__)

ENV_OUTPUT_FORMAT = "MOI_ID_OUTPUT_FORMAT"
ENV_LOG_LEVEL = "MOI_ID_LOG_LEVEL"

# Global cache to avoid reloading config multiple times per process
_config_cache: MoiIdConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/moi-identifiers/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "moi-identifiers" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .moi-id.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".moi-id.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested dicts
    are merged, not replaced.

    Example:
        >>> deep_merge({"output": {"format": "text"}, "a": 1}, {"output": {"format": "json"}})
        {'output': {'format': 'json'}, 'a': 1}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        MOI_ID_OUTPUT_FORMAT - overrides output.format ("text" or "json")
        MOI_ID_LOG_LEVEL - overrides logging.level

    Invalid values are ignored with a warning.
    """
    result = config_dict.copy()

    if fmt := os.environ.get(ENV_OUTPUT_FORMAT):
        fmt = fmt.strip().lower()
        if fmt in ("text", "json"):
            result["output"] = {**result.get("output", {}), "format": fmt}
        else:
            logger.warning("Invalid %s value '%s', ignoring", ENV_OUTPUT_FORMAT, fmt)

    if level := os.environ.get(ENV_LOG_LEVEL):
        level = level.strip().upper()
        if level in LOG_LEVELS:
            result["logging"] = {**result.get("logging", {}), "level": level}
        else:
            logger.warning("Invalid %s value '%s', ignoring", ENV_LOG_LEVEL, level)

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "output": {"format": "text"},
        "logging": {"level": "WARNING"},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> MoiIdConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (MOI_ID_*)
        2. Project config (.moi-id.json)
        3. User config (~/.config/moi-identifiers/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .moi-id.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated MoiIdConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    user_config_path = get_user_config_path()
    if user_config := load_json_file(user_config_path):
        merged = deep_merge(merged, user_config)

    project_config_path = get_project_config_path(project_dir)
    if project_config := load_json_file(project_config_path):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = MoiIdConfig(**merged)
    logger.debug("Loaded config: %s", config.model_dump())

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
