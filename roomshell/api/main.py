"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roomshell.config import AppSettings, configure_logging
from roomshell.errors import InvalidGeometryError, UnknownEntityError
from roomshell.services.shell_service import ShellService
from roomshell.api.routes import router


def create_app(
    settings: AppSettings | None = None,
    service: ShellService | None = None,
) -> FastAPI:
    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Room Shell Engine",
        description="Room shells and reversible door cuts from freeform solids",
        version="0.1.0",
    )
    app.state.service = service or ShellService(settings)

    # CORS: allow the editor front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UnknownEntityError)
    async def unknown_entity(request: Request, exc: UnknownEntityError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidGeometryError)
    async def invalid_geometry(request: Request, exc: InvalidGeometryError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(router, prefix="/api")

    return app


app = create_app()
