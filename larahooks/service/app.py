"""FastAPI application entrypoint for larahooks service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..orchestrator import Detection, Orchestrator
from ..report import CheckReport
from ..testmap import TestPlan


class DetectRequest(BaseModel):
    path: str
    stack: Optional[str] = None


class DetectResponse(BaseModel):
    stack: str
    overridden: bool
    test_patterns: List[str]
    backend_test_command: Optional[str] = None
    frontend_test_command: Optional[str] = None
    authoritative: bool


class CheckRequest(BaseModel):
    root: str
    path: str
    content: Optional[str] = None


class CheckResponse(BaseModel):
    stack: str
    passed: bool
    error_count: int
    skipped: Optional[str] = None
    findings: List[Dict[str, Any]]
    tools: List[Dict[str, Any]]


class TestsRequest(BaseModel):
    root: str
    path: str


class TestsResponse(BaseModel):
    stack: str
    test_file: Optional[str] = None
    candidates: List[str]
    commands: List[str]
    findings: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


async def _in_executor(func: Callable[[], Any]) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing larahooks operations."""

    app = FastAPI(title="larahooks", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/detect", response_model=DetectResponse)
    async def detect(
        payload: DetectRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> DetectResponse:
        detection: Detection = await _in_executor(
            lambda: orchestrator.detect(payload.path, payload.stack)
        )
        return DetectResponse(**detection.to_dict())

    @app.post("/check", response_model=CheckResponse)
    async def check(
        payload: CheckRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> CheckResponse:
        report: CheckReport = await _in_executor(
            lambda: orchestrator.run_check(payload.root, payload.path, payload.content)
        )
        return CheckResponse(**report.to_dict())

    @app.post("/tests", response_model=TestsResponse)
    async def tests(
        payload: TestsRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> TestsResponse:
        label, plan = await _in_executor(
            lambda: orchestrator.test_plan(payload.root, payload.path)
        )
        return _tests_response(label.value, plan)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _tests_response(stack: str, plan: TestPlan) -> TestsResponse:
    return TestsResponse(
        stack=stack,
        test_file=plan.test_file,
        candidates=list(plan.candidates),
        commands=[command.display for command in plan.commands],
        findings=[finding.to_dict() for finding in plan.findings],
    )


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
