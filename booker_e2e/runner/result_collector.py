"""Result collector for lifecycle runs.

Collects per-step outcomes in execution order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..validators.assertion_engine import AssertionReport


class StepStatus(str, Enum):
    """Outcome of a single step."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Outcome of one lifecycle step."""
    name: str
    title: str
    status: StepStatus = StepStatus.SKIPPED
    assertion_report: AssertionReport = field(default_factory=AssertionReport)
    duration_ms: int = 0
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status is StepStatus.PASSED


class ResultCollector:
    """Collects step results and tracks whether the run may continue."""

    def __init__(self):
        self.steps: list[StepResult] = []

    def add(self, result: StepResult) -> None:
        self.steps.append(result)

    def skip(self, name: str, title: str) -> None:
        self.steps.append(StepResult(name=name, title=title, status=StepStatus.SKIPPED))

    @property
    def has_failure(self) -> bool:
        return any(s.status is StepStatus.FAILED for s in self.steps)

    @property
    def first_error(self) -> Optional[str]:
        for step in self.steps:
            if step.error:
                return f"{step.title}: {step.error}"
        return None
