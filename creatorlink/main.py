"""Application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creatorlink.api.v1.router import get_api_router
from creatorlink.core.config import get_config
from creatorlink.core.startup import bootstrap
from creatorlink.services.inquiry_session_service import get_session_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap()
    yield
    # Pending auto-save timers must not fire after shutdown.
    get_session_service().close_all()


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn creatorlink.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    cfg = get_config()
    uvicorn.run("creatorlink.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
