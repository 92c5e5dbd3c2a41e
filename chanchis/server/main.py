"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chanchis.core.database import init_db
from chanchis.core.logging_config import get_logger, setup_logging
from chanchis.core.monitoring import initialize_logfire

from .api.v1 import businesses, health, transactions, transfer, upload, wallet
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTracingMiddleware
from .services.deps import close_clients

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the database tables on startup and closes the outbound HTTP
    clients on shutdown.
    """
    try:
        logger.info("Starting up Chanchis Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Chanchis Server...")
    await close_clients()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Chanchis Server API

    Backend of the Chanchis mini-app: gasless CHNC transfers on Celo relayed by a
    sponsor wallet, balances and transfer history, and the directory of
    affiliated businesses offering CHNC cashback.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestTracingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(transfer.router, prefix=f"{constant.API_V1_STR}/transfer")
app.include_router(wallet.router, prefix=f"{constant.API_V1_STR}/wallet")
app.include_router(transactions.router, prefix=f"{constant.API_V1_STR}/transactions")
app.include_router(businesses.router, prefix=f"{constant.API_V1_STR}/businesses")
app.include_router(upload.router, prefix=f"{constant.API_V1_STR}/upload")


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    uvicorn.run(
        "chanchis.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
