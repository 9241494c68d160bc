"""
backend/cad_converter/main.py

FastAPI Entrypoint.

Responsibilities:
- Initialize FastAPI app
- Load and validate settings at startup
- Wire the Supabase client, storage, CAD client and orchestrator
- Register routers (convert, status)
- Health check endpoint
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from cad_converter import __version__
from cad_converter.core.config import Settings
from cad_converter.core.database import DatabaseManager
from cad_converter.core.logger import logger, setup_logger
from cad_converter.core.storage import StorageManager
from cad_converter.core.supabase_client import get_supabase
from cad_converter.routes import convert, status
from cad_converter.services.cad_service import CadServiceClient
from cad_converter.services.pipeline_manager import ConversionOrchestrator


def build_orchestrator(settings: Settings) -> ConversionOrchestrator:
    """Construct the pipeline and its collaborators from validated settings."""
    supabase = get_supabase(settings)
    return ConversionOrchestrator(
        database=DatabaseManager(supabase),
        storage=StorageManager(supabase, bucket=settings.cad_bucket),
        cad_client=CadServiceClient(
            settings.cad_service_url, timeout=settings.cad_service_timeout
        ),
    )


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[ConversionOrchestrator] = None
) -> FastAPI:
    """
    Build the application.

    Settings are read from the environment at startup unless given; a missing
    required value stops the server from starting. Passing an orchestrator
    skips configuration entirely.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        pipeline = orchestrator
        if pipeline is None:
            app_settings = (settings or Settings.from_env()).validate()
            setup_logger(app_settings.log_level)
            pipeline = build_orchestrator(app_settings)
            logger.info(f"CAD service configured at {app_settings.cad_service_url}")

        app.state.orchestrator = pipeline
        app.state.database = pipeline.database
        yield

    app = FastAPI(
        title="convert-to-cad",
        description="Generates STEP/STL/OBJ models for vectorized jewelry designs",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "convert-to-cad is running"}

    app.include_router(convert.router)
    app.include_router(status.router)

    return app


app = create_app()
