"""
================================================================================
Fluent Automation Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - get_config: Get configuration values by dot-notation path
    - set_config: Override configuration values at runtime
    - reload_config: Re-read configuration files and environment
    - init_logger: Initialize loguru logger with standard settings

Usage:
    from fluent_automation.common import get_config, init_logger

    init_logger()
    timeout = get_config("wait.timeout", 30)

================================================================================
"""

from .global_config import get_config, init_logger, reload_config, set_config, to_bool

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "init_logger",
    "to_bool",
]
