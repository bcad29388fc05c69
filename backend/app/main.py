"""
Chat Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- REST API endpoints (messages, persona presence, analytics)
- WebSocket connections for live message updates
- Wiring of the translation core, built once per process
"""
from contextlib import asynccontextmanager
import logging
import os
from datetime import datetime, UTC
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api import router as api_router
from app.api.websocket import router as ws_router
from app.config.settings import Settings, settings as default_settings
from app.models.database import build_engine, build_session_factory, init_db
from app.services.analytics import AnalyticsRecorder
from app.services.connection import ConnectionManager
from app.services.core.repositories import MessageRepository, TranslationStatsRepository
from app.services.exceptions import ChatServiceError, MessageNotFoundError, NoCandidatesError
from app.services.message_service import MessageService
from app.services.metrics import start_metrics_server
from app.services.protocols import TranscriptionProtocol, TranslationProviderProtocol
from app.services.speech import DeepgramTranscriber
from app.services.translation import TranslationOrchestrator
from app.services.translation.providers import build_providers
from app.services.voice import VoiceProcessingPipeline

# Configure logging
logging.basicConfig(level=default_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings = default_settings,
    providers: Optional[Sequence[TranslationProviderProtocol]] = None,
    transcriber: Optional[TranscriptionProtocol] = None,
) -> FastAPI:
    """
    Build the application.

    ``providers`` and ``transcriber`` default to the ones configured in
    ``settings``; tests pass fakes instead.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Handles startup and shutdown events using the modern FastAPI pattern.
        """
        # === STARTUP ===
        logger.info("🚀 Starting chat backend...")

        os.makedirs(settings.MEDIA_ROOT, exist_ok=True)

        engine = build_engine(settings.database_url, echo=settings.DEBUG)
        await init_db(engine)
        logger.info("✅ Database tables created")
        session_factory = build_session_factory(engine)

        message_repository = MessageRepository(session_factory)
        analytics_recorder = AnalyticsRecorder(TranslationStatsRepository(session_factory))
        connection_manager = ConnectionManager()

        orchestrator = TranslationOrchestrator(
            build_providers(settings) if providers is None else providers,
            analytics_recorder,
        )
        voice_pipeline = VoiceProcessingPipeline(
            message_repository,
            transcriber or DeepgramTranscriber(settings.DEEPGRAM_API_KEY, settings.MEDIA_ROOT),
            orchestrator,
            connection_manager,
        )

        app.state.media_root = settings.MEDIA_ROOT
        app.state.connection_manager = connection_manager
        app.state.analytics_recorder = analytics_recorder
        app.state.voice_pipeline = voice_pipeline
        app.state.message_service = MessageService(
            message_repository,
            orchestrator,
            voice_pipeline,
            connection_manager,
            settings.MEDIA_ROOT,
        )
        logger.info("✅ Translation core ready")

        if settings.METRICS_ENABLED:
            start_metrics_server(settings.METRICS_PORT)

        yield  # Application runs here

        # === SHUTDOWN ===
        logger.info("🛑 Shutting down...")
        if voice_pipeline.pending_count:
            logger.info(f"Waiting for {voice_pipeline.pending_count} voice message(s) to finish")
            await voice_pipeline.drain()
        await engine.dispose()

    app = FastAPI(
        title="Chat Khanavadegi Backend",
        description="Two-persona chat with auto-translation and voice transcription",
        version="1.0.0",
        lifespan=lifespan
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_ORIGIN],
        allow_credentials=settings.CLIENT_ORIGIN != "*",
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(MessageNotFoundError)
    async def message_not_found_handler(request: Request, exc: MessageNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(NoCandidatesError)
    async def no_candidates_handler(request: Request, exc: NoCandidatesError):
        logger.error(f"Translation unavailable for {request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"error": str(exc)})

    @app.exception_handler(ChatServiceError)
    async def chat_service_error_handler(request: Request, exc: ChatServiceError):
        logger.error(f"Request failed ({request.url.path}): {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # Include REST API routes
    app.include_router(api_router, prefix="/api")

    # Include WebSocket routes
    app.include_router(ws_router)

    # Uploaded media
    app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False), name="media")

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint."""
        manager: ConnectionManager = request.app.state.connection_manager
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "connections": manager.get_total_connections(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=default_settings.API_HOST, port=default_settings.API_PORT)
