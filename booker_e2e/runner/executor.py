"""Lifecycle runner - executes the booking lifecycle against the API.

Runs four steps in strict order:
1. Authenticate (POST /auth)
2. Create booking (POST /booking)
3. Retrieve booking (GET /booking/:id)
4. Delete booking (DELETE /booking/:id)

The auth token and booking id are carried forward in a SessionState.
The first failing step stops the run; later steps are recorded as skipped.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..config import RunConfig
from ..errors import ExpectationFailed, StateError, TransportError
from ..fixture.schema import Booking
from ..reporting.json_reporter import JsonReporter
from ..transport.http_client import BookerHttpClient
from ..validators.assertion_engine import AssertionEngine
from .result_collector import ResultCollector, StepResult, StepStatus
from .state import SessionState

DELETE_CONFIRMATION = "Created"


@dataclass
class ExecutionConfig:
    """Output options for a run."""
    save_report: bool = False
    report_dir: Optional[Path] = None


@dataclass
class ExecutionResult:
    """Complete result of a lifecycle run."""
    base_url: str
    steps: list[StepResult] = field(default_factory=list)
    all_passed: bool = False
    booking_id: Optional[int] = None
    duration_ms: int = 0
    error: Optional[str] = None
    report_path: Optional[str] = None

    def to_report(self) -> dict:
        return JsonReporter().generate(
            base_url=self.base_url,
            steps=self.steps,
            duration_ms=self.duration_ms,
            booking_id=self.booking_id,
            error=self.error,
        )

    def to_flow_json(self) -> dict:
        """Convert to CLI compatible JSON output."""
        return JsonReporter().generate_flow_output(self.to_report(), self.report_path)


StepFunc = Callable[[BookerHttpClient, AssertionEngine], None]


class LifecycleRunner:
    """Runs the authenticate / create / retrieve / delete sequence."""

    def __init__(
        self,
        run_config: RunConfig,
        booking: Booking,
        config: Optional[ExecutionConfig] = None,
        client: Optional[BookerHttpClient] = None,
    ):
        """Initialize lifecycle runner.

        Args:
            run_config: Credentials, base URL and timeout.
            booking: Fixture to create, compare against, and delete.
            config: Output options.
            client: HTTP client (None = create one from run_config).
        """
        self.run_config = run_config
        self.booking = booking
        self.config = config or ExecutionConfig()
        self.client = client
        self.state = SessionState()
        self._reporter = JsonReporter()

    @property
    def steps(self) -> list[tuple[str, str, StepFunc]]:
        return [
            ("authenticate", "Get auth token", self._authenticate),
            ("create", "Create booking", self._create_booking),
            ("retrieve", "Retrieve booking", self._retrieve_booking),
            ("delete", "Delete booking", self._delete_booking),
        ]

    def execute(self) -> ExecutionResult:
        """Run every step in order.

        Returns:
            ExecutionResult with one StepResult per step.
        """
        start_time = time.time()
        collector = ResultCollector()
        client = self.client or BookerHttpClient(
            self.run_config.base_url,
            request_timeout=self.run_config.timeout,
        )

        with client:
            for index, (name, title, step) in enumerate(self.steps, start=1):
                if collector.has_failure:
                    collector.skip(name, title)
                    continue

                print(f"\n--- Step {index}: {title} ---")
                collector.add(self._run_step(name, title, step, client))

        result = ExecutionResult(
            base_url=self.run_config.base_url,
            steps=collector.steps,
            all_passed=not collector.has_failure,
            booking_id=self.state.booking_id,
            duration_ms=int((time.time() - start_time) * 1000),
            error=collector.first_error,
        )
        self._print_summary(result)

        if self.config.save_report:
            result.report_path = self._save_report(result)

        return result

    def _run_step(
        self,
        name: str,
        title: str,
        step: StepFunc,
        client: BookerHttpClient,
    ) -> StepResult:
        engine = AssertionEngine()
        result = StepResult(name=name, title=title, assertion_report=engine.report)
        start_time = time.time()

        try:
            step(client, engine)
            result.status = StepStatus.PASSED

        except ExpectationFailed as e:
            result.error = f"Expectation failed: {e}"

        except TransportError as e:
            result.error = f"Transport error: {e}"

        except StateError as e:
            result.error = str(e)

        except Exception as e:
            result.error = f"Unexpected error: {type(e).__name__}: {e}"

        finally:
            result.duration_ms = int((time.time() - start_time) * 1000)

        if result.error:
            result.status = StepStatus.FAILED
            print(f"ERROR: {result.error}")

        return result

    def _authenticate(self, client: BookerHttpClient, engine: AssertionEngine) -> None:
        response = client.create_token(self.run_config.username, self.run_config.password)
        engine.expect_status(response, 200)
        body = engine.expect_json(response)
        token = engine.expect_field(body, "token")
        engine.expect_non_empty("token", token)

        self.state.set_token(token)
        print(f"Token stored: {self.state.masked_token}")

    def _create_booking(self, client: BookerHttpClient, engine: AssertionEngine) -> None:
        response = client.create_booking(self.booking.to_dict())
        engine.expect_status(response, 200)
        body = engine.expect_json(response)
        booking_id = engine.expect_field(body, "bookingid")
        created = engine.expect_field(body, "booking")
        engine.expect_integer("bookingid", booking_id)

        # id is kept even when the echoed record mismatches
        self.state.set_booking_id(booking_id)
        engine.expect_booking(created, self.booking)
        print(f"Booking created: {booking_id}")

    def _retrieve_booking(self, client: BookerHttpClient, engine: AssertionEngine) -> None:
        booking_id = self.state.require_booking_id()
        response = client.get_booking(booking_id)
        engine.expect_status(response, 200)
        body = engine.expect_json(response)
        engine.expect_booking(body, self.booking)
        print(f"Booking {booking_id} matches fixture")

    def _delete_booking(self, client: BookerHttpClient, engine: AssertionEngine) -> None:
        booking_id = self.state.require_booking_id()
        token = self.state.require_token()
        response = client.delete_booking(booking_id, token, self.run_config.basic_auth)
        engine.expect_status(response, 201)
        engine.expect_text(response, DELETE_CONFIRMATION)
        print(f"Booking {booking_id} deleted")

    def _print_summary(self, result: ExecutionResult) -> None:
        """Print per-step results summary."""
        passed = sum(1 for s in result.steps if s.passed)
        print(f"\nResults: {passed}/{len(result.steps)} steps passed ({result.duration_ms} ms)")
        for step in result.steps:
            status = step.status.value.upper()
            if step.status is StepStatus.SKIPPED:
                detail = "not run"
            else:
                detail = step.error or f"{step.assertion_report.passed_count} checks"
            print(f"  [{status}] {step.title}: {detail}")

    def _save_report(self, result: ExecutionResult) -> Optional[str]:
        """Save run report to file."""
        try:
            report_dir = self.config.report_dir or Path(".")
            report_path = report_dir / "booker_e2e_report.json"
            saved_path = self._reporter.save(result.to_report(), report_path)
            print(f"Report saved: {saved_path}")
            return str(saved_path)

        except OSError as e:
            print(f"Warning: Failed to save report: {e}")
            return None
