"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from gradebet.api.middleware import RequestIDMiddleware, MetricsMiddleware
from gradebet.api.v1 import bets, classrooms, exams, results, stats, users
from gradebet.infrastructure.database.session import init_db
from gradebet.infrastructure.observability.logging import setup_logging
from gradebet.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="gradebet",
        description="Exam grade betting and accuracy scoring service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(classrooms.router, prefix="/v1", tags=["classrooms"])
    app.include_router(users.router, prefix="/v1", tags=["users"])
    app.include_router(exams.router, prefix="/v1", tags=["exams"])
    app.include_router(bets.router, prefix="/v1", tags=["bets"])
    app.include_router(results.router, prefix="/v1", tags=["results"])
    app.include_router(stats.router, prefix="/v1", tags=["stats"])

    return app


app = create_app()
