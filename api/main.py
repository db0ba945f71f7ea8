"""FastAPI application for the caddie round engine."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.session_manager import SessionManager
from database.connection import db
from database.db_manager import DatabaseManager
from llm import GeminiCaddieAssistant
from session import SessionSettings


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool and session holder on startup, release both on shutdown."""
    await db.initialize(dsn=os.environ.get("DATABASE_URL"))
    await db.initialize_schema()
    db_manager = DatabaseManager(db.pool)
    settings = SessionSettings.from_env()
    app.state.session_manager = SessionManager(
        courses=db_manager.courses,
        assistant=GeminiCaddieAssistant(assistant_name=settings.assistant_name),
        round_store=db_manager.rounds,
        course_notes=db_manager.courses,
        profile_store=db_manager.profiles,
        settings=settings,
    )
    yield
    await app.state.session_manager.release()
    await db.close()


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(
        title="Caddie Round Engine API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import session
    app.include_router(session.router, prefix="/api/session", tags=["session"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
