"""gqlcompose utilities package."""

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_SCHEMA_EXTENSIONS,
    ENV_LOG_FILE,
    ENV_LOG_JSON,
    ENV_LOG_LEVEL,
    ENV_PREFIX,
)
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger, set_level

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_SCHEMA_EXTENSIONS",
    "ENV_LOG_FILE",
    "ENV_LOG_JSON",
    "ENV_LOG_LEVEL",
    "ENV_PREFIX",
    "ExitCodes",
    "handle_exceptions",
    "logger",
    "set_level",
]
