"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the UI framework and the HTML report generation
step of `run_tests.py`.

================================================================================
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(image: Union[bytes, str, Path], name: str = "Screenshot"):
    """
    Attach a PNG screenshot to Allure report.

    Args:
        image: Raw PNG bytes or path to a PNG file
        name: Attachment name
    """
    if isinstance(image, (str, Path)):
        image = Path(image).read_bytes()
    allure.attach(
        image,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# HTML Report
# ================================================================================

def generate_html_report(results_dir: Union[str, Path], report_dir: Union[str, Path]) -> bool:
    """
    Generate the Allure HTML report.

    Args:
        results_dir: allure-results directory written by pytest
        report_dir: Output directory for the HTML report

    Returns:
        True if the report was generated
    """
    cmd = [
        "allure", "generate",
        str(results_dir),
        "-o", str(report_dir),
        "--clean"
    ]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Install allure-commandline to build HTML reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"HTML report generated at {report_dir}")
    return True
