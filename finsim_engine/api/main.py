"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finsim_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finsim_engine.api.v1 import projection, risk, scenario, loans, advisor
from finsim_engine.infrastructure.observability.logging import setup_logging
from finsim_engine.config import settings

# Setup structured logging
setup_logging()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinSim Projection Engine",
        description="Cash flow projection, loan amortization, and financial risk service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
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
    app.include_router(projection.router, prefix="/v1", tags=["projections"])
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(scenario.router, prefix="/v1", tags=["scenarios"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(advisor.router, prefix="/v1", tags=["advisor"])

    return app


app = create_app()
