"""
Process-level settings for the p5setup command.

Values come from the environment, optionally populated from a ``.env``
file in the working directory. Anything about the project itself, such as
file names or the library descriptor, lives in the YAML settings file
loaded by :func:`p5setup.config.load_settings`.
"""

from __future__ import annotations

import logging.config
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

load_dotenv()

# Directory the command is run from; project paths are resolved against it.
BASE_DIR = Path(os.getenv('P5SETUP_BASE_DIR', '.')).resolve()

SETTINGS_FILE = Path(os.getenv('P5SETUP_SETTINGS', BASE_DIR / 'p5setup.yaml'))

# Overrides ``project_dir`` from the settings file when set.
PROJECT_DIR = os.getenv('P5SETUP_PROJECT_DIR') or None

log_level = os.getenv('P5SETUP_LOG_LEVEL', 'INFO').upper()


def logging_config(level: str = log_level) -> Dict[str, Any]:
    """Return the ``dictConfig`` payload for the given level."""

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'console': {
                'format': '%(levelname)s %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'console',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': level,
        },
        'loggers': {
            'p5setup': {
                'level': level,
            },
            'httpx': {
                'level': 'WARNING',
            },
        },
    }


LOGGING = logging_config()


def configure_logging(level: str | None = None) -> None:
    """Apply :data:`LOGGING`, optionally overriding the level."""

    logging.config.dictConfig(logging_config(level.upper()) if level else LOGGING)
