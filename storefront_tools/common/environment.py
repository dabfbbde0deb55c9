"""
================================================================================
Environment Settings
================================================================================

Settings record for the storefront suites, assembled once at process start.

Configuration hierarchy (highest to lowest priority):
    1. Environment variables (BASE_URL, BROWSER, HEADLESS, ...)
    2. Optional YAML file (config/environment.yaml, snake_case keys)
    3. Built-in defaults

When no explicit environment mapping is supplied, a local `.env` file is
loaded first (real environment variables always win over `.env` entries).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from .artifacts import SCREENSHOT_PATH_PATTERN, VIDEO_PATH_PATTERN


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "environment.yaml"

DEFAULT_BASE_URL = "http://automationpractice.com/index.php"
DEFAULT_TEST_TIMEOUT_MS = 30000

# Demo accounts registered on the practice storefront
DEFAULT_USERS: Dict[str, Dict[str, str]] = {
    "testUser1": {
        "email": "Harrison30@gmail.com",
        "password": "oO_PI6jocB1JOLN",
    },
    "testUser2": {
        "email": "Bryon55@gmail.com",
        "password": "UYn4zvvJS45jLqB",
    },
}

# user key -> (email variable, password variable)
USER_ENV_VARS: Dict[str, tuple] = {
    "testUser1": ("TEST_USER1_EMAIL", "TEST_USER1_PASSWORD"),
    "testUser2": ("TEST_USER2_EMAIL", "TEST_USER2_PASSWORD"),
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class CredentialsNotFoundError(ConfigurationError):
    """Raised when a credential key is not configured."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"User credentials not found for key: {key}")


@dataclass(frozen=True)
class Credentials:
    """Email/password pair of a storefront account."""
    email: str
    password: str


@dataclass(frozen=True)
class EnvironmentSettings:
    """
    Read-only settings shared by every component of a test session.

    Build it with `load_settings()`; derive variants with
    `dataclasses.replace()` rather than mutating it.
    """

    base_url: str = DEFAULT_BASE_URL
    browser: str = "chrome"
    headless: bool = False

    concurrency: int = 1
    test_timeout_ms: int = DEFAULT_TEST_TIMEOUT_MS
    retry_count: int = 0

    screenshot_on_fail: bool = True
    video_recording: bool = False
    screenshot_path: str = "screenshots/"
    video_path: str = "videos/"
    screenshot_path_pattern: str = SCREENSHOT_PATH_PATTERN
    video_path_pattern: str = VIDEO_PATH_PATTERN

    log_level: str = "info"
    log_dir: str = "logs"

    users: Mapping[str, Credentials] = field(
        default_factory=lambda: MappingProxyType({
            key: Credentials(**value) for key, value in DEFAULT_USERS.items()
        })
    )

    is_ci: bool = False
    is_ci_github: bool = False

    report_path: str = "reports/"
    html_report_path: str = "reports/html/"
    allure_results_path: str = "allure-results/"

    # Driver timeouts (milliseconds)
    assertion_timeout_ms: int = 10000
    selector_timeout_ms: int = 10000
    page_request_timeout_ms: int = 10000
    click_retry_backoff_ms: int = 1000
    poll_interval_ms: int = 100

    @property
    def browser_selector(self) -> str:
        """Browser string in `<browser>` or `<browser>:headless` form."""
        return f"{self.browser}:headless" if self.headless else self.browser


def get_credentials(settings: EnvironmentSettings, key: str) -> Credentials:
    """
    Get user credentials by key.

    Args:
        settings: Loaded environment settings
        key: User identifier (e.g., "testUser1")

    Returns:
        Credentials with email and password

    Raises:
        CredentialsNotFoundError: If no user is configured under `key`
    """
    try:
        return settings.users[key]
    except KeyError:
        raise CredentialsNotFoundError(key) from None


def get_browser_config(settings: EnvironmentSettings) -> str:
    """Return the browser selector string for the configured browser."""
    return settings.browser_selector


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EnvironmentSettings:
    """
    Assemble settings from environment variables, YAML file and defaults.

    Args:
        config_path: YAML file to read. Uses DEFAULT_CONFIG_PATH if not specified;
                     a missing file is not an error.
        environ: Environment mapping. Uses `os.environ` (after loading `.env`)
                 if not specified.

    Returns:
        Frozen EnvironmentSettings

    Raises:
        ConfigurationError: If the YAML file cannot be parsed
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    file_values = _load_yaml(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)

    def pick(env_key: str, file_key: str) -> Any:
        if env_key in environ:
            return environ[env_key]
        return file_values.get(file_key)

    defaults = EnvironmentSettings()
    settings = EnvironmentSettings(
        base_url=pick("BASE_URL", "base_url") or defaults.base_url,
        browser=pick("BROWSER", "browser") or defaults.browser,
        headless=_opt_in(pick("HEADLESS", "headless")),
        concurrency=_positive_int(pick("CONCURRENCY", "concurrency"), defaults.concurrency),
        test_timeout_ms=_positive_int(
            pick("TEST_TIMEOUT", "test_timeout_ms"), defaults.test_timeout_ms
        ),
        retry_count=_positive_int(pick("RETRY_COUNT", "retry_count"), defaults.retry_count),
        screenshot_on_fail=_opt_out(pick("SCREENSHOT_ON_FAIL", "screenshot_on_fail")),
        video_recording=_opt_in(pick("VIDEO_RECORDING", "video_recording")),
        log_level=str(pick("LOG_LEVEL", "log_level") or defaults.log_level),
        users=_build_users(file_values.get("users") or {}, environ),
        is_ci=_opt_in(pick("CI", "is_ci")),
        is_ci_github=_opt_in(pick("GITHUB_ACTIONS", "is_ci_github")),
    )

    logger.debug(
        f"Settings loaded: base_url={settings.base_url} "
        f"browser={settings.browser_selector} concurrency={settings.concurrency}"
    )
    return settings


# =============================================================================
# Parsing helpers
# =============================================================================

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Read the optional YAML settings file."""
    if not path.exists():
        logger.debug(f"Settings file not found: {path}. Using environment and defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


def _build_users(
    file_users: Mapping[str, Any],
    environ: Mapping[str, str],
) -> Mapping[str, Credentials]:
    """Merge default, file and environment credentials into a read-only mapping."""
    merged: Dict[str, Dict[str, str]] = {
        key: dict(value) for key, value in DEFAULT_USERS.items()
    }
    for key, value in file_users.items():
        merged.setdefault(key, {}).update(value or {})

    for key, (email_var, password_var) in USER_ENV_VARS.items():
        entry = merged.setdefault(key, {})
        if environ.get(email_var):
            entry["email"] = environ[email_var]
        if environ.get(password_var):
            entry["password"] = environ[password_var]

    users = {}
    for key, entry in merged.items():
        if "email" not in entry or "password" not in entry:
            raise ConfigurationError(f"Credentials for '{key}' need both email and password")
        users[key] = Credentials(email=str(entry["email"]), password=str(entry["password"]))
    return MappingProxyType(users)


def _opt_in(value: Any) -> bool:
    """True only for an explicit "true"."""
    if isinstance(value, bool):
        return value
    return value is not None and str(value).strip().lower() == "true"


def _opt_out(value: Any) -> bool:
    """True unless explicitly "false"."""
    if isinstance(value, bool):
        return value
    return value is None or str(value).strip().lower() != "false"


def _positive_int(value: Any, default: int) -> int:
    """Parse an integer setting; missing, invalid or non-positive values fall back."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


__all__ = [
    "ConfigurationError",
    "Credentials",
    "CredentialsNotFoundError",
    "EnvironmentSettings",
    "get_browser_config",
    "get_credentials",
    "load_settings",
]
