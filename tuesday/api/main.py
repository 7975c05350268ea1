import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from tuesday.api.errors import register_exception_handlers
from tuesday.api.routes import admin, boards, columns, overview, tasks, users
from tuesday.core.config import get_settings
from tuesday.core.logger import setup_logger
from tuesday.models.db import async_session_factory, engine, init_db
from tuesday.services.admin_service import AdminService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    await init_db()

    if settings.admin_email:
        async with async_session_factory() as session:
            await AdminService(session).ensure_admin(settings.admin_email, settings.admin_name)

    logger.info(f"{settings.app_name} API ready")
    yield
    await engine.dispose()


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=f"{settings.app_name} API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    app.include_router(boards.router, prefix="/api/boards", tags=["boards"])
    app.include_router(columns.router, prefix="/api/columns", tags=["columns"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(overview.router, prefix="/api/overview", tags=["overview"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    return app


app = create_app()


def run() -> None:
    """Entry point for the ``tuesday-api`` console script."""
    settings = get_settings()
    setup_logger(debug=settings.debug)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    run()
