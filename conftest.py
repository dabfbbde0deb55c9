"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (no secrets embedded)
  - Register the `--json-report` option that writes the structured run report
  - Keep behavior explicit and discoverable

Important:
  No credentials are set here. Test users come from the settings file or
  from a secret store in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from storefront_tools.report_tools import JsonReport


class JsonReportPlugin:
    """Feeds every test report into a JsonReport and writes it at session end."""

    def __init__(self, path: str):
        self.report = JsonReport(path)

    def pytest_runtest_logreport(self, report):
        self.report.add(report)

    def pytest_sessionfinish(self, session, exitstatus):
        self.report.write()


def pytest_addoption(parser):
    group = parser.getgroup("storefront")
    group.addoption(
        "--json-report",
        action="store",
        dest="json_report_path",
        default=None,
        metavar="PATH",
        help="Write a structured JSON report (outcomes + summary) to PATH",
    )


def pytest_configure(config):
    path = config.getoption("json_report_path")
    # xdist workers forward their reports to the controller, which writes the file
    if path and not hasattr(config, "workerinput"):
        config.pluginmanager.register(JsonReportPlugin(path), "storefront-json-report")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.

    This keeps local runs predictable.
    """
    defaults = {
        "BASE_URL": "http://automationpractice.com/index.php",
        "BROWSER": "chrome",
        "HEADLESS": "true",
        "SCREENSHOT_ON_FAIL": "true",
        "LOG_LEVEL": "info",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
