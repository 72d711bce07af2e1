"""JSON report generator for lifecycle runs.

Generates structured JSON reports from step results.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..runner.result_collector import StepResult


class JsonReporter:
    """Generates JSON reports from lifecycle run results."""

    def generate(
        self,
        base_url: str,
        steps: list["StepResult"],
        duration_ms: int = 0,
        booking_id: Optional[int] = None,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from step results.

        Args:
            base_url: API the run was executed against.
            steps: Step results in execution order.
            duration_ms: Run duration in milliseconds.
            booking_id: Booking id assigned by the create step, if any.
            error: First error of the run, if any.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        counts = {"passed": 0, "failed": 0, "skipped": 0}
        for step in steps:
            counts[step.status.value] += 1

        all_passed = bool(steps) and counts["passed"] == len(steps) and error is None

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "base_url": base_url,
            "status": "passed" if all_passed else "failed",
            "booking_id": booking_id,
            "summary": {
                "total": len(steps),
                "passed": counts["passed"],
                "failed": counts["failed"],
                "skipped": counts["skipped"],
                "duration_ms": duration_ms,
            },
            "steps": [
                {
                    "name": step.name,
                    "title": step.title,
                    "status": step.status.value,
                    "duration_ms": step.duration_ms,
                    "error": step.error,
                    "checks": [
                        {
                            "name": r.name,
                            "status": "pass" if r.passed else "fail",
                            "details": r.details,
                        }
                        for r in step.assertion_report.results
                    ],
                }
                for step in steps
            ],
            "error": error,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_flow_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate CLI compatible JSON output.

        Follows the JSON output envelope:
        {
            "success": bool,
            "command": "run",
            "data": { ... },
            "message": str
        }

        Args:
            report: Run report dictionary.
            report_path: Path where report was saved.

        Returns:
            Envelope dictionary.
        """
        summary = report["summary"]
        all_passed = report["status"] == "passed"

        data: dict[str, Any] = {
            "base_url": report["base_url"],
            "booking_id": report["booking_id"],
            "total_steps": summary["total"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "skipped": summary["skipped"],
            "duration_ms": summary["duration_ms"],
        }

        if report_path:
            data["report_path"] = report_path

        if not all_passed and report.get("error"):
            message = f"Run failed: {report['error']}"
        elif not all_passed:
            message = f"{summary['failed']} of {summary['total']} steps failed"
        else:
            message = "All steps passed"

        return {
            "success": all_passed,
            "command": "run",
            "data": data,
            "message": message,
        }
