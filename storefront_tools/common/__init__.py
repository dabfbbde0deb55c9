"""
================================================================================
Storefront Tools Common Utilities
================================================================================

Exports:
    - EnvironmentSettings / load_settings: process-wide settings record
    - get_credentials / get_browser_config: settings lookups
    - configure_logging / StepLogger: loguru setup and the injected logger
    - render_artifact_path: screenshot/video path templating

================================================================================
"""

from .artifacts import (
    SCREENSHOT_PATH_PATTERN,
    VIDEO_PATH_PATTERN,
    render_artifact_path,
)
from .environment import (
    ConfigurationError,
    Credentials,
    CredentialsNotFoundError,
    EnvironmentSettings,
    get_browser_config,
    get_credentials,
    load_settings,
)
from .logging_config import (
    StepLogger,
    configure_logging,
    install_rejection_handler,
)

__all__ = [
    "SCREENSHOT_PATH_PATTERN",
    "VIDEO_PATH_PATTERN",
    "render_artifact_path",
    "ConfigurationError",
    "Credentials",
    "CredentialsNotFoundError",
    "EnvironmentSettings",
    "get_browser_config",
    "get_credentials",
    "load_settings",
    "StepLogger",
    "configure_logging",
    "install_rejection_handler",
]
