# myblog/main.py
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from myblog import __version__
from myblog.api import response
from myblog.api.routers.admin_router import router as admin_router
from myblog.api.routers.auth_router import router as auth_router
from myblog.api.routers.crypto_router import router as crypto_router
from myblog.api.routers.health_router import router as health_router
from myblog.api.static import StaticFileGate
from myblog.auth.tokens import token_service_from_settings
from myblog.core.errors import AppError
from myblog.core.settings import Settings, settings
from myblog.crypto.sessions import ECCSessionStore
from myblog.db.bootstrap import bootstrap_database
from myblog.db.config import DBConfig
from myblog.db.drivers import DriverResolver, get_driver
from myblog.db.engine import make_session_factory, open_database
from myblog.utils.logging_setup import parse_level, setup_logging

logger = logging.getLogger(__name__)

ECC_CLEANUP_INTERVAL = 5 * 60  # seconds


async def _cleanup_ecc_sessions(store: ECCSessionStore, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        store.cleanup_expired()
        logger.debug(f"ECC session sweep done, active sessions: {store.count()}")


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return response.bad_request("BAD_REQUEST", "invalid request format", exc)


def create_app(
    settings: Optional[Settings] = None,
    resolver: DriverResolver = get_driver,
    run_bootstrap: bool = True,
) -> FastAPI:
    """
    Composition root.

    The token service and ECC session store are created here; the database is
    opened (and bootstrapped) when the application starts and disposed when
    it stops.
    """
    settings = settings or Settings()
    db_config = DBConfig.from_settings(settings).with_driver_defaults()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = open_database(db_config, resolver=resolver)
        cleanup = None
        try:
            if run_bootstrap:
                bootstrap_database(engine, markdown_dir=settings.markdown_dir)
            app.state.engine = engine
            app.state.session_factory = make_session_factory(engine)

            cleanup = asyncio.create_task(
                _cleanup_ecc_sessions(app.state.ecc_sessions, ECC_CLEANUP_INTERVAL)
            )
            yield
        finally:
            if cleanup is not None:
                cleanup.cancel()
                with suppress(asyncio.CancelledError):
                    await cleanup
            engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(
        title="MyBlog API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = token_service_from_settings(
        settings.jwt_secret, settings.jwt_expire_hours, settings.jwt_secret_file
    )
    app.state.ecc_sessions = ECCSessionStore()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, response.app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(crypto_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFileGate(directory=static_dir), name="static")
    else:
        logger.warning(f"Static directory not found, /static disabled: {static_dir}")

    return app


def build_app() -> FastAPI:
    setup_logging(
        "myblog",
        level=parse_level(settings.log_level),
        log_file=settings.log_file or None,
    )
    return create_app(settings)


# Uvicorn entrypoint: uvicorn myblog.main:build_app --factory --reload
