from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    queued = "QUEUED"
    in_progress = "IN_PROGRESS"
    completed = "COMPLETED"
    failed = "FAILED"


class RenderOutputs(BaseModel):
    svg: str | None = None
    diagnostics: list[str] = Field(default_factory=list)


class RenderJob(BaseModel):
    id: str
    status: JobStatus = JobStatus.queued
    source: str | None = None
    record_id: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    started_at: datetime | None = None
    finished_at: datetime | None = None
    errors: list[str] = Field(default_factory=list)
    outputs: RenderOutputs = Field(default_factory=RenderOutputs)

    def mark_running(self) -> None:
        self.status = JobStatus.in_progress
        self.started_at = _utcnow()

    def mark_completed(self, outputs: RenderOutputs) -> None:
        self.status = JobStatus.completed
        self.finished_at = _utcnow()
        self.outputs = outputs

    def mark_failed(self, error: str) -> None:
        self.status = JobStatus.failed
        self.finished_at = _utcnow()
        self.errors.append(error)


__all__ = ["JobStatus", "RenderJob", "RenderOutputs"]
