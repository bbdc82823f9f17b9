"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from astha_engine.api.dependencies import SpendDataset
from astha_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from astha_engine.api.v1 import exports, finance, leaderboard, mandates
from astha_engine.config import settings
from astha_engine.data.demo import USERS, generate_transactions, sample_bills, sample_debts
from astha_engine.domain.portfolio import BookStore, FinanceBook
from astha_engine.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app(dataset: SpendDataset | None = None, book: FinanceBook | None = None) -> FastAPI:
    """Create and configure FastAPI application, seeded with the demo data by default"""
    app = FastAPI(
        title="Astha Engine",
        description="Spend leaderboard, reward tiers, debt payoff projection and e-mandates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if dataset is None:
        periods, transactions = generate_transactions(settings.demo_seed, settings.demo_months)
        dataset = SpendDataset(periods=periods, transactions=transactions, users=list(USERS))
    app.state.dataset = dataset
    app.state.book_store = BookStore(book or FinanceBook(debts=sample_debts(), bills=sample_bills()))

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
    app.include_router(leaderboard.router, prefix="/v1", tags=["leaderboard"])
    app.include_router(finance.router, prefix="/v1", tags=["finance"])
    app.include_router(exports.router, prefix="/v1", tags=["exports"])
    app.include_router(mandates.router, prefix="/v1", tags=["mandates"])

    return app


app = create_app()
