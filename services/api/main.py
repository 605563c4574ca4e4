from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from fastapi import BackgroundTasks, FastAPI, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from wireframe_svg.converter import WireframeConverter
from wireframe_svg.errors import FontLoadError, WireframeNotFoundError
from wireframe_svg.font_loader import REMOTE_SCHEMES, FontLoader
from wireframe_svg.job_store import JobStore
from wireframe_svg.logging_config import set_trace_id, setup_logging
from wireframe_svg.models.job import JobStatus, RenderJob, RenderOutputs
from wireframe_svg.models.wireframe import Wireframe
from wireframe_svg.options import DEFAULT_FONT_FAMILY, ConvertOptions
from wireframe_svg.text_metrics import PillowTextMeasurer
from wireframe_svg.wireframe_repository import LocalWireframeRepository

SVG_MEDIA_TYPE = "image/svg+xml"


class RenderRequest(BaseModel):
    source: str = Field(default="inline")
    record_id: str | None = None
    wireframe: Wireframe | None = Field(default=None, description="Optional inline wireframe document")
    options: ConvertOptions | None = None

    @field_validator("options")
    @classmethod
    def _remote_font_only(cls, options: ConvertOptions | None) -> ConvertOptions | None:
        if options is not None and options.font_url and urlparse(options.font_url).scheme not in REMOTE_SCHEMES:
            raise ValueError("fontURL must be an http or https URL")
        return options


class RenderJobResponse(BaseModel):
    job_id: str
    status: JobStatus


class JobResponse(BaseModel):
    id: str
    status: JobStatus
    outputs: RenderOutputs
    errors: list[str]

    @staticmethod
    def from_record(record: RenderJob) -> "JobResponse":
        return JobResponse(
            id=record.id,
            status=record.status,
            outputs=record.outputs,
            errors=list(record.errors),
        )


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
WIREFRAME_DATA_DIR = os.getenv("WIREFRAME_DATA_DIR", "data/wireframes")
FONT_FAMILY = os.getenv("DEFAULT_FONT_FAMILY", DEFAULT_FONT_FAMILY)

setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wireframe SVG Renderer API", version="0.1.0")

job_store = JobStore()
font_loader = FontLoader(allow_local_paths=False)
measurer = PillowTextMeasurer()
converter = WireframeConverter(measurer=measurer, font_loader=font_loader)
repository = LocalWireframeRepository(base_path=Path(WIREFRAME_DATA_DIR).resolve())


@app.post("/v1/wireframes:render")
async def render_wireframe(request: RenderRequest) -> Response:
    set_trace_id(str(uuid.uuid4()))
    wireframe = _load_wireframe(request)
    options = _options(request)
    try:
        surface = await _converter_for(options).convert(wireframe, options)
    except FontLoadError as exc:
        logger.error("Font load failed", extra={"record_id": request.record_id, "error": str(exc)})
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    headers = {"X-Render-Diagnostics": str(len(surface.diagnostics))}
    return Response(content=surface.to_string(), media_type=SVG_MEDIA_TYPE, headers=headers)


@app.post("/v1/renders", response_model=RenderJobResponse)
async def queue_render(request: RenderRequest, background_tasks: BackgroundTasks) -> RenderJobResponse:
    if request.wireframe is None and not request.record_id:
        raise HTTPException(status_code=422, detail="Either wireframe or record_id is required")
    job = job_store.create_job(source=request.source, record_id=request.record_id)
    background_tasks.add_task(_run_job, job.id, request)
    return RenderJobResponse(job_id=job.id, status=job.status)


@app.get("/v1/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: str) -> JobResponse:
    record = job_store.get_job(job_id)
    if not record:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.from_record(record)


async def _run_job(job_id: str, request: RenderRequest) -> None:
    set_trace_id(job_id)
    job_store.start(job_id)
    try:
        wireframe = request.wireframe or repository.get(record_id=request.record_id or "")
        options = _options(request)
        surface = await _converter_for(options).convert(wireframe, options)
    except Exception as exc:
        logger.error("Render job failed", exc_info=True, extra={"job_id": job_id, "error": str(exc)})
        job_store.fail(job_id, str(exc))
        return
    job_store.complete(job_id, RenderOutputs(svg=surface.to_string(), diagnostics=surface.diagnostics))
    logger.info("Render job completed", extra={"job_id": job_id, "diagnostics": len(surface.diagnostics)})


def _load_wireframe(request: RenderRequest) -> Wireframe:
    if request.wireframe is not None:
        return request.wireframe
    if not request.record_id:
        raise HTTPException(status_code=422, detail="Either wireframe or record_id is required")
    try:
        return repository.get(record_id=request.record_id)
    except WireframeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _options(request: RenderRequest) -> ConvertOptions:
    if request.options is not None:
        return request.options
    return ConvertOptions(font_family=FONT_FAMILY)


def _converter_for(options: ConvertOptions) -> WireframeConverter:
    # Registered fonts live on the measurer, so a caller-supplied font gets its own.
    if options.font_url:
        return WireframeConverter(measurer=PillowTextMeasurer(), font_loader=font_loader)
    return converter


@app.get("/health")
async def healthcheck() -> JSONResponse:
    payload: dict[str, Any] = {"status": "ok", "environment": ENVIRONMENT}
    return JSONResponse(payload)
