"""
Code Explainer - FastAPI Backend
Main application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
import os
import time

from config.settings import settings


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

MAX_LOG_LINE = 80


from api.errors import register_exception_handlers, unexpected_error_handler
from api.routes import health, explain
from services.explainer.client import ExplanationServiceClient
from services.history.recorder import HistoryRecorder
from services.history.store import HistoryStore, create_history_store
from services.llm.client import CodeLLM


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("🚀 Starting Code Explainer...")
    logger.info("   🤖 Provider: %s (%s)", settings.LLM_PROVIDER, settings.LLM_MODEL)
    logger.info("   🗂️ History: %s", type(app.state.history_recorder.store).__name__)
    llm = getattr(app.state.explainer, "llm", None)
    if not getattr(llm, "api_key", True):
        logger.warning("   ⚠️ No %s API key set, explanations will return 503", settings.LLM_PROVIDER)

    yield

    # Shutdown
    logger.info("👋 Shutting down...")


def create_app(
    explainer: ExplanationServiceClient = None,
    history_store: HistoryStore = None,
) -> FastAPI:
    """
    Build the application with its collaborators.

    Both arguments default to the configured implementations; tests pass
    fakes instead.
    """
    app = FastAPI(
        title="Code Explainer",
        description="AI-powered code explanations with complexity analysis",
        version=health.VERSION,
        lifespan=lifespan,
    )

    app.state.explainer = explainer if explainer is not None else ExplanationServiceClient(CodeLLM())
    app.state.history_recorder = HistoryRecorder(
        history_store if history_store is not None else create_history_store(settings)
    )

    # Unexpected errors are answered here, inside CORS, so the 500 body
    # still carries CORS headers and the request is still logged
    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unexpected_error_handler(request, exc)
        if request.url.path.startswith("/api"):
            duration = int((time.perf_counter() - start) * 1000)
            line = f"{request.method} {request.url.path} {response.status_code} in {duration}ms"
            if len(line) > MAX_LOG_LINE:
                line = line[:MAX_LOG_LINE - 1] + "…"
            logger.info(line)
        return response

    # CORS middleware (added last, so it wraps everything above)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router)
    app.include_router(explain.router)

    # Web UI, mounted last so /api and /docs match first
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="ui")
    else:
        logger.warning("⚠️ UI directory not found: %s", settings.STATIC_DIR)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
