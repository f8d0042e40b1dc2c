"""
Step results — the outcome contract of installer steps.

Every orchestrator step returns a ``StepResult``.  Steps capture their own
expected failures here; the orchestrator converts unexpected exceptions
into ``failed`` results so one step never stops the pipeline.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

StepStatus = Literal["skipped", "planned", "verified", "failed"]


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StepResult(BaseModel):
    """Final state of one installer step.

    ``planned`` is the dry-run terminal state: the step would have
    executed, but nothing was changed and nothing can be verified.
    """

    step: str
    status: StepStatus
    message: str = ""
    backups: list[str] = Field(default_factory=list)
    ended_at: str = Field(default_factory=_now_iso)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @classmethod
    def skipped(cls, step: str, reason: str = "", **kwargs: Any) -> StepResult:
        return cls(step=step, status="skipped", message=reason, **kwargs)

    @classmethod
    def planned(cls, step: str, message: str = "", **kwargs: Any) -> StepResult:
        return cls(step=step, status="planned", message=message, **kwargs)

    @classmethod
    def verified(cls, step: str, message: str = "", **kwargs: Any) -> StepResult:
        return cls(step=step, status="verified", message=message, **kwargs)

    @classmethod
    def failure(cls, step: str, error: str, **kwargs: Any) -> StepResult:
        return cls(step=step, status="failed", message=error, **kwargs)


class InstallReport(BaseModel):
    """All step results of one install run, in execution order."""

    dry_run: bool = False
    results: list[StepResult] = Field(default_factory=list)

    @property
    def failed(self) -> list[StepResult]:
        return [r for r in self.results if r.status == "failed"]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "dry_run": self.dry_run,
            "steps": [r.model_dump() for r in self.results],
        }
