"""
Repository-level pytest configuration.

Why this exists:
  - Initialize loguru once, from config/config.yaml, for every suite
  - Keep local runs predictable (headless browser unless the user/CI says otherwise)
  - Make the repo "plug-and-play" for anyone cloning it
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from fluent_automation.common.global_config import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set safe environment defaults if not already provided by the user/CI.

    Browser settings use the SECTION__KEY override convention understood
    by the configuration loader.
    """
    defaults = {
        "BROWSER__HEADLESS": "true",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    init_logger()
    yield
