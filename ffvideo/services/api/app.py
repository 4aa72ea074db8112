from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ffvideo.common.logging import get_logger
from ffvideo.common.settings import get_settings
from ffvideo.services.api.routers import health, videos


def create_app() -> FastAPI:
    cfg = get_settings()
    dev = cfg.app_env.lower() == "development"
    get_logger("ffvideo", cfg.log_level)

    app = FastAPI(
        title="ffvideo API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(videos.router)
    return app
