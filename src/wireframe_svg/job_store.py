from __future__ import annotations

import threading
import uuid
from typing import Callable

from .models.job import RenderJob, RenderOutputs


class JobStore:
    """In-memory, thread-safe registry of render jobs."""

    def __init__(self) -> None:
        self._jobs: dict[str, RenderJob] = {}
        self._lock = threading.Lock()

    def create_job(self, *, source: str, record_id: str | None = None) -> RenderJob:
        job = RenderJob(id=self._new_id(record_id), source=source, record_id=record_id)
        with self._lock:
            self._jobs[job.id] = job
        return job.model_copy(deep=True)

    def get_job(self, job_id: str) -> RenderJob | None:
        with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy(deep=True) if job else None

    def start(self, job_id: str) -> RenderJob:
        return self._apply(job_id, lambda job: job.mark_running())

    def complete(self, job_id: str, outputs: RenderOutputs) -> RenderJob:
        return self._apply(job_id, lambda job: job.mark_completed(outputs))

    def fail(self, job_id: str, error: str) -> RenderJob:
        return self._apply(job_id, lambda job: job.mark_failed(error))

    def _apply(self, job_id: str, change: Callable[[RenderJob], None]) -> RenderJob:
        with self._lock:
            job = self._jobs[job_id]
            change(job)
            return job.model_copy(deep=True)

    @staticmethod
    def _new_id(record_id: str | None) -> str:
        suffix = uuid.uuid4().hex[:8]
        if record_id:
            return f"render_{record_id.replace('/', '-')}_{suffix}"
        return f"render_{suffix}"


__all__ = ["JobStore"]
