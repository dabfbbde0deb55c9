"""
Test suites package.

Holds the UI framework (`ui_testing.framework`), the storefront page objects,
the live-site end-to-end tests and the framework unit tests. Kept importable
so `run_tests.py`, IDEs and CI jobs can reach the framework modules.
"""
