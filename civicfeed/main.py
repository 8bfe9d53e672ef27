# File: civicfeed/main.py
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from civicfeed.core.config import cors_origins_list, settings
from civicfeed.core.errors import register_error_handlers
from civicfeed.core.logging import setup_logging
from civicfeed.core.ratelimit import limiter
from civicfeed.db.store import MemoryStore
from civicfeed.routers import analysis, demo, issues, technicians, users
from civicfeed.services.classifier import Classifier


def create_app(store: Optional[MemoryStore] = None, classifier: Optional[Classifier] = None) -> FastAPI:
    logger = setup_logging(settings.log_level, settings.log_dir)

    app = FastAPI(title=settings.app_name)
    app.state.limiter = limiter
    app.state.store = store if store is not None else MemoryStore(seed=settings.seed_on_startup)
    app.state.classifier = classifier or Classifier(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout_seconds=settings.classifier_timeout_seconds,
    )
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            elapsed = (time.perf_counter() - start) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {elapsed:.0f}ms")
        return response

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(issues.router)
    app.include_router(technicians.router)
    app.include_router(users.router)
    app.include_router(analysis.router)
    app.include_router(demo.router)

    logger.info(
        f"{settings.app_name} ready: store={app.state.store.counts()} "
        f"classifier={'gemini' if app.state.classifier.enabled else 'fallback'}"
    )
    return app


app = create_app()
