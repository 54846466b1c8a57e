"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wellness_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from wellness_gateway.api.v1 import budget, categorize, context, users, wellness
from wellness_gateway.infrastructure.observability.logging import setup_logging
from wellness_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Wellness Gateway",
        description="Budget, wellness score and transaction pattern analytics",
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
    app.include_router(categorize.router, prefix="/v1", tags=["categorize"])
    app.include_router(budget.router, prefix="/v1", tags=["budget"])
    app.include_router(wellness.router, prefix="/v1", tags=["wellness"])
    app.include_router(context.router, prefix="/v1", tags=["context"])
    app.include_router(users.router, prefix="/v1", tags=["users"])

    return app


app = create_app()
