"""
Unit tests for LifecycleRunner.

The HTTP session is a Mock; each test feeds the responses the API would
return, in request order.
"""

import json

import pytest
import requests

from booker_e2e.runner import ExecutionConfig, LifecycleRunner, StepStatus

from conftest import make_response


def _runner(run_config, booking, client, **config):
    return LifecycleRunner(
        run_config=run_config,
        booking=booking,
        config=ExecutionConfig(**config),
        client=client,
    )


def _statuses(result):
    return [s.status for s in result.steps]


def test_full_lifecycle_passes(run_config, booking, client, session, happy_responses):
    session.request.side_effect = happy_responses

    result = _runner(run_config, booking, client).execute()

    assert result.all_passed
    assert result.error is None
    assert result.booking_id == 42
    assert [s.name for s in result.steps] == ["authenticate", "create", "retrieve", "delete"]
    assert _statuses(result) == [StepStatus.PASSED] * 4
    session.close.assert_called_once()


def test_state_is_threaded_between_steps(run_config, booking, client, session, happy_responses):
    session.request.side_effect = happy_responses

    runner = _runner(run_config, booking, client)
    runner.execute()

    calls = session.request.call_args_list
    assert [c.args for c in calls] == [
        ("POST", "http://booker.test/auth"),
        ("POST", "http://booker.test/booking"),
        ("GET", "http://booker.test/booking/42"),
        ("DELETE", "http://booker.test/booking/42"),
    ]
    assert calls[3].kwargs["headers"]["Cookie"] == "token=abc123def456ghi"
    assert calls[3].kwargs["auth"].username == "admin"
    assert calls[3].kwargs["auth"].password == "password123"
    assert runner.state.auth_token == "abc123def456ghi"


def test_auth_failure_skips_remaining_steps(run_config, booking, client, session):
    session.request.side_effect = [make_response(200, {"reason": "Bad credentials"})]

    result = _runner(run_config, booking, client).execute()

    assert not result.all_passed
    assert _statuses(result) == [
        StepStatus.FAILED,
        StepStatus.SKIPPED,
        StepStatus.SKIPPED,
        StepStatus.SKIPPED,
    ]
    assert "has 'token'" in result.error
    assert result.error.startswith("Get auth token:")
    assert session.request.call_count == 1


def test_create_mismatch_fails_step(run_config, booking, client, session, booking_data):
    echoed = dict(booking_data, totalprice=112)
    session.request.side_effect = [
        make_response(200, {"token": "tok"}),
        make_response(200, {"bookingid": 7, "booking": echoed}),
    ]

    result = _runner(run_config, booking, client).execute()

    create = result.steps[1]
    assert create.status is StepStatus.FAILED
    assert "totalprice" in create.error
    assert result.booking_id == 7
    assert _statuses(result)[2:] == [StepStatus.SKIPPED, StepStatus.SKIPPED]


def test_non_integer_booking_id_fails(run_config, booking, client, session, booking_data):
    session.request.side_effect = [
        make_response(200, {"token": "tok"}),
        make_response(200, {"bookingid": "7", "booking": booking_data}),
    ]

    result = _runner(run_config, booking, client).execute()

    assert result.steps[1].status is StepStatus.FAILED
    assert result.booking_id is None


def test_retrieve_wrong_status_fails(run_config, booking, client, session, happy_responses):
    happy_responses[2] = make_response(404, text="Not Found")
    session.request.side_effect = happy_responses[:3]

    result = _runner(run_config, booking, client).execute()

    assert _statuses(result) == [
        StepStatus.PASSED,
        StepStatus.PASSED,
        StepStatus.FAILED,
        StepStatus.SKIPPED,
    ]
    assert "expected 200, got 404" in result.steps[2].error


def test_delete_wrong_status_fails(run_config, booking, client, session, happy_responses):
    happy_responses[3] = make_response(403, text="Forbidden")
    session.request.side_effect = happy_responses

    result = _runner(run_config, booking, client).execute()

    assert result.steps[3].status is StepStatus.FAILED
    assert "expected 201, got 403" in result.steps[3].error


def test_delete_wrong_confirmation_body_fails(run_config, booking, client, session, happy_responses):
    happy_responses[3] = make_response(201, text="Forbidden")
    session.request.side_effect = happy_responses

    result = _runner(run_config, booking, client).execute()

    delete = result.steps[3]
    assert delete.status is StepStatus.FAILED
    assert "body: expected 'Created', got 'Forbidden'" in delete.error
    assert [r.name for r in delete.assertion_report.results] == ["status", "body"]


def test_transport_error_fails_step(run_config, booking, client, session):
    session.request.side_effect = requests.Timeout("read timed out")

    result = _runner(run_config, booking, client).execute()

    assert result.steps[0].status is StepStatus.FAILED
    assert result.steps[0].error.startswith("Transport error:")
    assert session.request.call_count == 1


def test_unexpected_error_is_reported(run_config, booking, client, session):
    session.request.side_effect = RuntimeError("boom")

    result = _runner(run_config, booking, client).execute()

    assert result.steps[0].error == "Unexpected error: RuntimeError: boom"


def test_console_output(run_config, booking, client, session, happy_responses, capsys):
    session.request.side_effect = happy_responses

    _runner(run_config, booking, client).execute()

    out = capsys.readouterr().out
    assert "--- Step 1: Get auth token ---" in out
    assert "Token stored: abc123def4..." in out
    assert "abc123def456ghi" not in out
    assert "Booking created: 42" in out
    assert "Results: 4/4 steps passed" in out


def test_report_saved(run_config, booking, client, session, happy_responses, tmp_path):
    session.request.side_effect = happy_responses

    result = _runner(
        run_config, booking, client, save_report=True, report_dir=tmp_path
    ).execute()

    assert result.report_path == str(tmp_path / "booker_e2e_report.json")
    saved = json.loads((tmp_path / "booker_e2e_report.json").read_text(encoding="utf-8"))
    assert saved["status"] == "passed"
    assert saved["summary"]["passed"] == 4


def test_flow_json(run_config, booking, client, session, happy_responses):
    session.request.side_effect = happy_responses

    output = _runner(run_config, booking, client).execute().to_flow_json()

    assert output["success"] is True
    assert output["command"] == "run"
    assert output["data"]["booking_id"] == 42
    assert output["message"] == "All steps passed"


@pytest.mark.parametrize("missing", ["token", "booking_id"])
def test_delete_requires_state(run_config, booking, client, session, missing):
    runner = _runner(run_config, booking, client)
    if missing == "token":
        runner.state.set_booking_id(1)
    else:
        runner.state.set_token("tok")

    step = runner._run_step("delete", "Delete booking", runner._delete_booking, client)

    assert step.status is StepStatus.FAILED
    assert "must be set before use" in step.error
    session.request.assert_not_called()
