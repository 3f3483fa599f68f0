"""
Car rental backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as cars_router
from auth.routes import router as auth_router
from config.settings import config
from database.store import CarRentalStore, MongoStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("pymongo", "motor", "httpx", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await app.state.store.connect()
    logger.info("Application ready to accept requests.")
    yield
    await app.state.store.close()


def create_app(store: Optional[CarRentalStore] = None) -> FastAPI:
    """Build the app around ``store``; a ``MongoStore`` from config by default."""
    app = FastAPI(
        lifespan=lifespan,
        title="Car Rental API",
        version="1.0.0",
        description="User accounts and rental car listings.",
    )
    app.state.store = store if store is not None else MongoStore(
        config.mongo_uri,
        config.mongo_db_name,
        timeout_ms=config.mongo_timeout_ms,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(cars_router)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server running on http://localhost:%d", config.port)
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
