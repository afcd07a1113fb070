"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from dealscore_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from dealscore_gateway.api.v1 import deals, dealers, explanation
from dealscore_gateway.infrastructure.observability.logging import setup_logging
from dealscore_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="DealScore Gateway",
        description="Dealer fee transparency grading service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(deals.router, prefix="/v1", tags=["deals"])
    app.include_router(dealers.router, prefix="/v1", tags=["dealers"])
    app.include_router(explanation.router, prefix="/v1", tags=["grading"])

    return app


app = create_app()
