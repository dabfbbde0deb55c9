import asyncio
import sys

import pytest
from loguru import logger

from storefront_tools.common.logging_config import (
    StepLogger,
    configure_logging,
    install_rejection_handler,
)


@pytest.fixture
def log_dir(tmp_path):
    directory = tmp_path / "logs"
    yield directory
    # Release file handles and restore the default hooks for other tests
    logger.remove()
    logger.add(sys.stderr)
    sys.excepthook = sys.__excepthook__


def read(path):
    logger.complete()
    return path.read_text(encoding="utf-8") if path.exists() else ""


def test_step_vocabulary_and_context(log_dir):
    log = configure_logging("debug", log_dir, console=False)

    log.step("Sign in", user="testUser1")
    log.action("Clicking element with retry", retries=3)
    log.assertion("Element should be visible")

    content = read(log_dir / "application.log")
    assert "| INFO     | TEST STEP: Sign in | {\"user\": \"testUser1\"}" in content
    assert "| DEBUG    | TEST ACTION: Clicking element with retry | {\"retries\": 3}" in content
    # No context -> no trailing JSON
    assert "TEST ASSERTION: Element should be visible\n" in content


def test_level_threshold(log_dir):
    log = configure_logging("info", log_dir, console=False)

    log.action("hidden at info")
    log.info("shown at info")

    content = read(log_dir / "application.log")
    assert "hidden at info" not in content
    assert "shown at info" in content


def test_errors_also_go_to_error_log(log_dir):
    log = configure_logging("info", log_dir, console=False)

    log.info("routine")
    log.error("broken", element="#SubmitLogin")

    errors = read(log_dir / "error.log")
    assert "broken" in errors
    assert "routine" not in errors


def test_bound_logger_carries_context(log_dir):
    log = configure_logging("info", log_dir, console=False).bind(test="test_search")

    log.info("Searching", query="dress")

    content = read(log_dir / "application.log")
    assert '"test": "test_search"' in content
    assert '"query": "dress"' in content


def test_uncaught_exception_hook(log_dir):
    configure_logging("info", log_dir, console=False)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        sys.excepthook(*sys.exc_info())

    assert "Uncaught exception" in read(log_dir / "exceptions.log")
    assert "Uncaught exception" not in read(log_dir / "rejections.log")


async def test_unawaited_task_errors_go_to_rejections_log(log_dir):
    configure_logging("info", log_dir, console=False)
    loop = asyncio.get_running_loop()
    previous = loop.get_exception_handler()
    install_rejection_handler(loop)
    try:
        loop.call_exception_handler({"message": "Task exception was never retrieved", "exception": ValueError("lost")})
    finally:
        loop.set_exception_handler(previous)

    content = read(log_dir / "rejections.log")
    assert "Unhandled rejection: Task exception was never retrieved" in content
    assert "ValueError: lost" in content


def test_step_logger_defaults_to_global_logger(log_dir):
    configure_logging("info", log_dir, console=False)

    StepLogger().warning("detached logger")

    assert "detached logger" in read(log_dir / "application.log")
