"""FastAPI application entrypoint for projdigest service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, ScanConfiguration, apply_overrides, load_config
from ..models import ScanResult
from ..scanner import ProjectScanner, resolve_root


class DigestRequest(BaseModel):
    path: str
    full_export: bool = False
    tree: Optional[str] = None
    signatures: Optional[str] = None
    max_files: Optional[int] = None
    max_lines: Optional[int] = None


class DigestResponse(BaseModel):
    text: str
    discovered: int
    selected: List[str]


class HealthResponse(BaseModel):
    status: str


def create_app(
    scanner_factory: Callable[[ScanConfiguration], ProjectScanner] = ProjectScanner,
) -> FastAPI:
    """Create the FastAPI application exposing digest generation."""

    app = FastAPI(title="projdigest service", version="0.4.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/digest", response_model=DigestResponse)
    async def digest(payload: DigestRequest) -> DigestResponse:
        def _run_scan() -> ScanResult:
            root = resolve_root(payload.path)
            base = ScanConfiguration.full_export() if payload.full_export else load_config(root)
            config = apply_overrides(
                base,
                tree=payload.tree,
                signatures=payload.signatures,
                max_files=payload.max_files,
                max_lines=payload.max_lines,
            )
            return scanner_factory(config).scan(root)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_scan)
        return DigestResponse(
            text=result.text,
            discovered=result.discovered,
            selected=[candidate.relative_path for candidate in result.selected],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
