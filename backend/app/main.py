from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import RequestContextMiddleware, configure_logging, logger
from app.api.router import api_router
from app.db.session import engine
from app.db.base import Base
from app.db import models as _models  # noqa: F401
from app.services.seed import seed_demo

@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Ensure tables exist for dev-only convenience; in prod rely on alembic
    if settings.ENV == "dev":
        Base.metadata.create_all(bind=engine)
        if settings.SEED_DEMO:
            seed_demo()
    yield

def create_app() -> FastAPI:
    configure_logging(settings.ENV)
    app = FastAPI(title="Solar Build Tracker API", version="0.1.0", lifespan=lifespan)

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    app.add_middleware(RequestContextMiddleware)
    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()
