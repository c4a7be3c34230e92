"""FastAPI application factory for Lexia integrations."""

import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from lexia import VERSION
from lexia.config import Settings, configure_logging, get_settings

logger = logging.getLogger(__name__)


def create_lexia_app(
    title: str = "Lexia AI Agent",
    version: str = VERSION,
    description: str = "AI agent integrated with the Lexia platform",
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure a FastAPI application for a Lexia agent."""
    # Load environment variables from .env file
    load_dotenv()
    config = settings or get_settings()
    configure_logging(config.log_level)

    app = FastAPI(
        title=title,
        description=description,
        version=version,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"
        return response

    logger.info(f"Created Lexia app '{title}' v{version}")
    return app
