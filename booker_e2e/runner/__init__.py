"""Runner module - lifecycle orchestration."""

from .executor import ExecutionConfig, ExecutionResult, LifecycleRunner
from .result_collector import ResultCollector, StepResult, StepStatus
from .state import SessionState

__all__ = [
    "ExecutionConfig",
    "ExecutionResult",
    "LifecycleRunner",
    "ResultCollector",
    "StepResult",
    "StepStatus",
    "SessionState",
]
