"""
Unit tests for JsonReporter.
"""

import json

from booker_e2e.reporting import JsonReporter
from booker_e2e.runner import StepResult, StepStatus
from booker_e2e.validators import AssertionReport, AssertionResult


def _steps():
    auth_report = AssertionReport(results=[AssertionResult("status", True, "expected 200, got 200")])
    create_report = AssertionReport(results=[
        AssertionResult("status", True, "expected 200, got 200"),
        AssertionResult("firstname", False, "expected 'Jim', got 'Tim'"),
    ])
    return [
        StepResult("authenticate", "Get auth token", StepStatus.PASSED, auth_report, 12),
        StepResult(
            "create", "Create booking", StepStatus.FAILED, create_report, 30,
            error="Expectation failed: firstname: expected 'Jim', got 'Tim'",
        ),
        StepResult("retrieve", "Retrieve booking"),
        StepResult("delete", "Delete booking"),
    ]


def test_generate_failed_report():
    report = JsonReporter().generate(
        base_url="http://booker.test",
        steps=_steps(),
        duration_ms=50,
        booking_id=9,
        error="Create booking: Expectation failed: firstname",
    )

    assert report["status"] == "failed"
    assert report["booking_id"] == 9
    assert report["summary"] == {
        "total": 4,
        "passed": 1,
        "failed": 1,
        "skipped": 2,
        "duration_ms": 50,
    }
    create = report["steps"][1]
    assert create["status"] == "failed"
    assert create["checks"][1] == {
        "name": "firstname",
        "status": "fail",
        "details": "expected 'Jim', got 'Tim'",
    }
    assert report["steps"][2]["checks"] == []


def test_generate_with_no_steps_is_failed():
    report = JsonReporter().generate(base_url="http://booker.test", steps=[])

    assert report["status"] == "failed"


def test_flow_output_messages():
    reporter = JsonReporter()
    failed = reporter.generate("http://booker.test", _steps(), error="Create booking: boom")

    output = reporter.generate_flow_output(failed, report_path="out/report.json")

    assert output["success"] is False
    assert output["message"] == "Run failed: Create booking: boom"
    assert output["data"]["report_path"] == "out/report.json"
    assert output["data"]["skipped"] == 2

    failed["error"] = None
    assert reporter.generate_flow_output(failed)["message"] == "1 of 4 steps failed"


def test_save_creates_parent_dirs(tmp_path):
    reporter = JsonReporter()
    report = reporter.generate("http://booker.test", _steps())

    path = reporter.save(report, tmp_path / "nested" / "report.json")

    assert json.loads(path.read_text(encoding="utf-8"))["base_url"] == "http://booker.test"


def test_to_json_string():
    reporter = JsonReporter()
    report = {"a": 1}

    assert reporter.to_json_string(report, pretty=False) == '{"a": 1}'
    assert "\n" in reporter.to_json_string(report)
