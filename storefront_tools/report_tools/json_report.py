"""
================================================================================
Structured JSON Run Report
================================================================================

Collects pytest reports during a run and writes one JSON document:

    {
      "summary": {"total": 3, "passed": 2, "failed": 1, ...},
      "tests": [{"nodeid": "...", "outcome": "failed", "duration": 1.2,
                 "message": "..."}, ...]
    }

Enabled through the `--json-report=PATH` pytest option (see root conftest).

================================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger


@dataclass
class RunSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    errors: int = 0
    duration_s: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "errors": self.errors,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_s": round(self.duration_s, 3),
            "timestamp": self.timestamp,
        }


class JsonReport:
    """
    Accumulates per-test outcomes from pytest `TestReport` objects.

    A test is recorded once: by its call phase, or by setup/teardown when
    those phases fail or skip.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._tests: Dict[str, Dict[str, Any]] = {}

    def add(self, report: Any) -> None:
        """Record a pytest TestReport."""
        if report.when != "call" and report.passed:
            return

        entry = self._tests.get(report.nodeid)
        if entry is not None and entry["outcome"] in ("failed", "error"):
            return

        outcome = report.outcome
        if report.when != "call" and report.failed:
            outcome = "error"

        self._tests[report.nodeid] = {
            "nodeid": report.nodeid,
            "outcome": outcome,
            "phase": report.when,
            "duration": round(getattr(report, "duration", 0.0), 3),
            "message": self._failure_message(report),
        }

    def summary(self) -> RunSummary:
        summary = RunSummary()
        for entry in self._tests.values():
            summary.total += 1
            summary.duration_s += entry["duration"]
            if entry["outcome"] == "passed":
                summary.passed += 1
            elif entry["outcome"] == "failed":
                summary.failed += 1
            elif entry["outcome"] == "skipped":
                summary.skipped += 1
            else:
                summary.errors += 1
        return summary

    def write(self) -> Path:
        """Write the report document and return its path."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "summary": self.summary().to_dict(),
            "tests": list(self._tests.values()),
        }
        self.path.write_text(json.dumps(document, indent=2, default=str), encoding="utf-8")
        logger.info(f"JSON report written to {self.path}")
        return self.path

    @staticmethod
    def _failure_message(report: Any) -> Optional[str]:
        if report.passed:
            return None
        if report.skipped and isinstance(report.longrepr, tuple):
            return str(report.longrepr[2])
        crash = getattr(report.longrepr, "reprcrash", None)
        if crash is not None:
            return crash.message
        return str(report.longrepr) if report.longrepr else None


__all__ = [
    "JsonReport",
    "RunSummary",
]
