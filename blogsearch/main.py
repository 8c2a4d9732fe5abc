"""FastAPI application entry point.

create_app() wires lifespan, exception handlers, middleware and routers;
search behavior lives in blogsearch.application. Settings are read when the
app is built, so tests can adjust the environment (and clear the settings
cache) first.

Run with `blogsearch-serve` or `uvicorn blogsearch.main:app`.
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from blogsearch.api.v1 import api_router
from blogsearch.core.config import Settings, get_settings
from blogsearch.core.exception_handlers import register_exception_handlers
from blogsearch.core.lifespan import create_lifespan
from blogsearch.core.limiter import limiter
from blogsearch.middleware import RequestIDMiddleware
from blogsearch.pages import render_root_page


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: request id is bound before CORS handling.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)


def create_app() -> FastAPI:
    """Build the search API application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.limiter = limiter
    register_exception_handlers(app)
    _add_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")

    page = render_root_page(settings.app_name)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def root() -> HTMLResponse:
        """Landing page with a live search box."""
        return HTMLResponse(content=page)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (console script blogsearch-serve)."""
    settings = get_settings()
    uvicorn.run(
        "blogsearch.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
