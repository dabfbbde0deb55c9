"""
================================================================================
Storefront Tools
================================================================================

Shared infrastructure for the storefront end-to-end suites.

Modules:
    - common: Environment settings, logging and artifact path helpers
    - report_tools: Allure attachments and the structured JSON report

Example:
    from storefront_tools.common import load_settings, configure_logging

    settings = load_settings()
    log = configure_logging(settings.log_level, settings.log_dir)
    log.step("Open storefront", url=settings.base_url)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
