import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

import inventory_adjust.models  # noqa: F401
from inventory_adjust.api.routes import api_router
from inventory_adjust.core.config import get_settings
from inventory_adjust.core.logging_config import configure_logging
from inventory_adjust.db.base import Base
from inventory_adjust.db.session import SessionLocal, engine
from inventory_adjust.services.seed import seed_demo_data


settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


def init_database() -> None:
    retries = 20
    while retries > 0:
        try:
            Base.metadata.create_all(bind=engine)
            break
        except OperationalError:
            retries -= 1
            if retries == 0:
                raise
            logger.warning("Database not ready, retrying (%s attempts left)", retries)
            time.sleep(1)

    if settings.seed_demo_data:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.store_backend == "database":
        init_database()
    logger.info("%s started with %s store backend", settings.app_name, settings.store_backend)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root() -> dict:
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
def health() -> dict:
    return {"ok": True}


app.include_router(api_router, prefix=settings.api_v1_prefix)
