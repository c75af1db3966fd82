"""
================================================================================
Global Configuration for Fluent Automation
================================================================================

This module provides centralized configuration management for the framework,
including logging setup and configuration file loading.

Features:
    - Module-level configuration cache
    - YAML-based configuration loading
    - Environment variable support
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

# Override with FLUENT_CONFIG_DIR to point at a different config directory
CONFIG_DIR_ENV = "FLUENT_CONFIG_DIR"

# Names config/{ENV}.yaml, merged over config.yaml when set
ENV_NAME_ENV = "ENV"

# Sections that SECTION__KEY environment variables may override
OVERRIDABLE_SECTIONS = ("logging", "browser", "wait")


def init_logger(level: Optional[str] = None, format_str: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config(
        "logging.format",
        "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    )

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    global _config
    if not _config:
        _load_config()


def _candidate_config_dirs() -> List[Path]:
    dirs = []
    if os.getenv(CONFIG_DIR_ENV):
        dirs.append(Path(os.environ[CONFIG_DIR_ENV]))
    dirs.extend([
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ])
    return dirs


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()

    config_dir = next((d for d in _candidate_config_dirs() if d.is_dir()), None)
    if config_dir is None:
        logger.debug("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv(ENV_NAME_ENV)
        env_config_path = config_dir / f"{env}.yaml" if env else None
        if env_config_path is not None and env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _get_defaults() -> Dict[str, Any]:
    """
    Returns default configuration values.
    """
    return {
        "logging": {
            "level": "INFO",
            "format": "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        },
        "browser": {
            "name": "chrome",
            "headless": True,
            "remote_url": None,
            "capabilities": {},
        },
        "wait": {
            "timeout": 30.0,
            "poll_interval": 0.1,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Use double underscore to separate nested keys
        - Example: WAIT__TIMEOUT=5 overrides wait.timeout
        - Only OVERRIDABLE_SECTIONS are considered
    """
    for key, value in os.environ.items():
        parts = [p.lower() for p in key.split("__")]
        if len(parts) > 1 and parts[0] in OVERRIDABLE_SECTIONS and all(parts):
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        if not isinstance(d.get(key), dict):
            d[key] = {}
        d = d[key]
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "wait.timeout").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("wait.timeout", 30)
        30.0
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return default if value is None else value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config() -> None:
    """
    Reloads the configuration from files.
    """
    global _config, _logger_initialized
    _config = {}
    _logger_initialized = False
    _load_config()
    init_logger()
    logger.info("Configuration reloaded.")


def to_bool(value: Any) -> bool:
    """Coerce a config value (possibly an env string) to bool."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


__all__ = [
    "init_logger",
    "get_config",
    "set_config",
    "reload_config",
    "to_bool",
]
