"""
Report utilities: Allure attachments, HTML report generation and the
structured JSON run report.
"""

from .allure_utils import attach_json, attach_png, attach_text, generate_html_report
from .json_report import JsonReport, RunSummary

__all__ = [
    "attach_json",
    "attach_png",
    "attach_text",
    "generate_html_report",
    "JsonReport",
    "RunSummary",
]
