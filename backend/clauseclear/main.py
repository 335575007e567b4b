from pathlib import Path
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from clauseclear.config import Settings, get_settings
from clauseclear.logging_config import configure_logging
from clauseclear.routes.documents import router as documents_router
from clauseclear.routes.pages import router as pages_router

logger = structlog.get_logger(__name__)

_static = Path(__file__).resolve().parent / "static"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="ClauseClear",
        description="Simplify contracts, flag risks and score fairness before signing",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pages_router)
    app.include_router(documents_router)
    app.mount("/static", StaticFiles(directory=str(_static)), name="static")

    @app.get("/health")
    def health():
        return {"ok": True}

    if not settings.gemini_api_key:
        logger.warning("gemini_api_key_missing", hint="Set GEMINI_API_KEY in the environment or .env")
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("server_starting", url=f"http://{settings.host}:{settings.port}")
    uvicorn.run("clauseclear.main:app", host=settings.host, port=settings.port)
