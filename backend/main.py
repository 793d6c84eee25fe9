from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from datetime import datetime
from typing import Optional
import logging
import os

from config import Settings
from database import Base, make_engine, make_session_factory
from utils.auth_utils import GoogleTokenVerifier
import models  # noqa: F401 (registers the tables on Base.metadata)
import routers.accounts as accounts
import routers.app_config as app_config
import routers.auth as auth
import routers.debug as debug
import routers.journal_entry as journal_entry

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    """Console logging, plus a timestamped file when LOG_DIR is set."""
    handlers = [logging.StreamHandler()]
    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file = os.path.join(settings.log_dir, f"app_{current_time_str}.log")
        handlers.append(logging.FileHandler(log_file, mode='a'))

    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT, handlers=handlers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.info(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


def create_app(settings: Optional[Settings] = None, token_verifier: Optional[GoogleTokenVerifier] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    configure_logging(settings)
    logger.info("Application starting up...")

    engine = make_engine(settings.database_url)
    # Create database tables
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Ledger Books API", version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.token_verifier = token_verifier or GoogleTokenVerifier(
        client_id=settings.google_client_id,
        jwks_url=settings.google_jwks_url,
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.is_production,
    )
    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title="Ledger Books API",
            version="1.0.0",
            description="Chart of accounts and journal entries",
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "session",
            },
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            },
        }
        openapi_schema["security"] = [{"SessionCookie": []}, {"BearerAuth": []}]
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    app.include_router(auth.router)
    app.include_router(app_config.router)
    app.include_router(accounts.router)
    app.include_router(journal_entry.router)
    if settings.debug:
        app.include_router(debug.router)

    # Static frontend last so that it never shadows the API
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        @app.get("/", include_in_schema=False)
        async def root():
            return {"message": "Ledger Books API"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
