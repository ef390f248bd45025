"""
Postboard Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(settings)` builds the engine, session factory, credential
       helpers and services from one Settings object, stores them on
       `app.state`, and registers middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn postboard.main:app`), the `postboard` console script,
       and the test-suite (which passes its own Settings).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  Request ID → Logging → CORS           │
    │  Routes:      /register /login /users /posts /health│
    │  Errors:      400 │ 401 │ 403 │ 404 │ 500           │
    │  app.state:   settings, engine, session_factory,    │
    │               token_issuer, *_service               │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate security-relevant settings
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard import __version__
from postboard.config import Settings
from postboard.database import build_engine, build_session_factory
from postboard.exceptions import (
    ConflictError,
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    PostboardError,
    UnauthorizedError,
    ValidationError,
)
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import RequestIDMiddleware, request_id_var
from postboard.routes import health, posts, users
from postboard.security import PasswordHasher, TokenIssuer
from postboard.services.auth_service import AuthService
from postboard.services.post_service import PostService
from postboard.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Postboard Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Development setups run with defaults; warn loudly but keep serving
        logger.warning("%s", str(e))

    logger.info(
        "Auth required: %s | Post ownership enforced: %s",
        settings.auth_required,
        settings.enforce_post_ownership,
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Postboard Backend shutting down...")
    await app.state.engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error envelope.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        UnauthorizedError                        → 401
        ForbiddenError                           → 403
        NotFoundError                            → 404
        ConflictError                            → 500 (registration failed)
        DatabaseError                            → 500
        PostboardError (base)                    → 500
        Exception (fallback)                     → 500

    5xx responses never include exception context; it is logged instead.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Schema failures: report every failing field, not just the first."""
        fields = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %d field(s)", request_id_var.get(""), len(fields))
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Request validation failed", {"fields": fields}),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=_error_body("unauthorized", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("[%s] Forbidden: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=403,
            content=_error_body("forbidden", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        # Cause (duplicate name vs. hash failure) stays in the log
        logger.warning("[%s] Registration failed | Context: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("registration_failed", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(PostboardError)
    async def handle_app_error(request: Request, exc: PostboardError):
        logger.error("[%s] Unhandled application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Framework-level errors (unknown route, wrong method) in the same envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Assemble the application from one Settings object.

    Every collaborator a handler needs is created here and placed on
    `app.state`; handlers obtain them through `postboard.routes.deps`.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Postboard API",
        description="User registration, token login and post CRUD.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    engine = build_engine(settings)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    token_issuer = TokenIssuer.from_settings(settings)
    user_service = UserService(hasher)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = token_issuer
    app.state.user_service = user_service
    app.state.post_service = PostService(enforce_ownership=settings.enforce_post_ownership)
    app.state.auth_service = AuthService(user_service, hasher, token_issuer)

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve `postboard.main:app` with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "postboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `postboard.main:app` to be importable
app = create_app()
