"""
Artifact path templating for screenshots and videos.

Patterns use `${DATE}`, `${TIME}`, `${FIXTURE}`, `${TEST}`, `${BROWSER}` and
`${FILE_INDEX}` placeholders, rendered relative to an artifact root directory.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from string import Template
from typing import Optional, Union


SCREENSHOT_PATH_PATTERN = "${DATE}_${TIME}/${FIXTURE}/${TEST}/${BROWSER}/${FILE_INDEX}.png"
VIDEO_PATH_PATTERN = "${DATE}_${TIME}/${FIXTURE}/${TEST}/${BROWSER}/${FILE_INDEX}.mp4"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_path_component(value: str) -> str:
    """Replace characters that are not filesystem-safe with underscores."""
    cleaned = _UNSAFE_CHARS.sub("_", value).strip("._")
    return cleaned or "unnamed"


def render_artifact_path(
    root: Union[str, Path],
    pattern: str,
    fixture: str,
    test: str,
    browser: str,
    file_index: int = 1,
    when: Optional[datetime] = None,
) -> Path:
    """
    Render an artifact path pattern.

    Args:
        root: Artifact root directory (e.g., "screenshots/")
        pattern: Path pattern with ${...} placeholders
        fixture: Fixture (suite) name, usually the test module or class
        test: Test name
        browser: Browser name
        file_index: 1-based index of the artifact within the test
        when: Timestamp for DATE/TIME; defaults to now

    Returns:
        Path under `root`

    Example:
        >>> render_artifact_path("screenshots", SCREENSHOT_PATH_PATTERN,
        ...                      "TestLogin", "test_login_success", "chrome",
        ...                      when=datetime(2024, 5, 1, 9, 30, 5))
        PosixPath('screenshots/2024-05-01_09-30-05/TestLogin/test_login_success/chrome/1.png')
    """
    when = when or datetime.now()
    relative = Template(pattern).substitute(
        DATE=when.strftime("%Y-%m-%d"),
        TIME=when.strftime("%H-%M-%S"),
        FIXTURE=safe_path_component(fixture),
        TEST=safe_path_component(test),
        BROWSER=safe_path_component(browser),
        FILE_INDEX=str(file_index),
    )
    return Path(root) / relative


__all__ = [
    "SCREENSHOT_PATH_PATTERN",
    "VIDEO_PATH_PATTERN",
    "render_artifact_path",
    "safe_path_component",
]
