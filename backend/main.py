from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, get_settings
from core.errors import register_error_handlers
from core.logging import SERVICE_VERSION, configure_logging, default_level, get_logger
from core.middleware import RequestLoggingMiddleware
from core.security import AuthUser, require_user

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", message="Conduit API starting up")
    yield
    log.info("shutdown", message="Conduit API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    # Initialize logging before anything else
    configure_logging(
        level=settings.app.log_level or default_level(settings.app.env),
        json_logs=settings.app.log_json,
    )

    app = FastAPI(
        title="Conduit API",
        description="RealWorld blogging platform API",
        version=settings.app.version,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Middleware (order matters: last added = first executed)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors.origins,
        allow_credentials=settings.security.cors.credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": SERVICE_VERSION}

    @app.get("/api/user")
    async def current_user(user: Annotated[AuthUser, Depends(require_user)]):
        return {"user": {"id": user.id, "email": user.email, "username": user.username}}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    log.info("server_config", host=settings.app.host, port=settings.app.port, env=settings.app.env)
    uvicorn.run(
        create_app(settings),
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,  # Disable uvicorn's default logging, we handle it
    )
