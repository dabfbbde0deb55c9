import json
from types import SimpleNamespace

from storefront_tools.report_tools.json_report import JsonReport, RunSummary


def make_report(nodeid, when, outcome, duration=0.1, longrepr=None):
    return SimpleNamespace(
        nodeid=nodeid,
        when=when,
        outcome=outcome,
        passed=outcome == "passed",
        failed=outcome == "failed",
        skipped=outcome == "skipped",
        duration=duration,
        longrepr=longrepr,
    )


def test_report_counts_each_test_once(tmp_path):
    report = JsonReport(tmp_path / "reports" / "report.json")

    for when in ("setup", "call", "teardown"):
        report.add(make_report("t.py::test_ok", when, "passed"))

    report.add(make_report("t.py::test_bad", "setup", "passed"))
    report.add(make_report(
        "t.py::test_bad", "call", "failed",
        longrepr=SimpleNamespace(reprcrash=SimpleNamespace(message="AssertionError: Text should equal: Welcome")),
    ))
    report.add(make_report("t.py::test_bad", "teardown", "passed"))

    report.add(make_report("t.py::test_skip", "setup", "skipped", longrepr=("t.py", 3, "Skipped: E2E_ENABLED")))

    summary = report.summary()
    assert (summary.total, summary.passed, summary.failed, summary.skipped, summary.errors) == (3, 1, 1, 1, 0)


def test_setup_failure_is_an_error(tmp_path):
    report = JsonReport(tmp_path / "report.json")
    report.add(make_report("t.py::test_x", "setup", "failed", longrepr="fixture exploded"))
    report.add(make_report("t.py::test_x", "teardown", "passed"))

    assert report.summary().errors == 1


def test_write_produces_summary_and_tests(tmp_path):
    path = tmp_path / "reports" / "report.json"
    report = JsonReport(path)
    report.add(make_report("t.py::test_ok", "call", "passed", duration=1.5))

    assert report.write() == path

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["summary"]["total"] == 1
    assert document["summary"]["pass_rate"] == "100.00%"
    assert document["tests"][0] == {
        "nodeid": "t.py::test_ok",
        "outcome": "passed",
        "phase": "call",
        "duration": 1.5,
        "message": None,
    }


def test_pass_rate_of_empty_run():
    assert RunSummary().pass_rate == 0.0
