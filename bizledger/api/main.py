"""FastAPI application factory"""

from typing import Optional

from fastapi import FastAPI

from bizledger.api.dependencies import get_settings
from bizledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from bizledger.api import system
from bizledger.api.v1 import finance
from bizledger.config import Settings, settings
from bizledger.infrastructure.observability.logging import setup_logging


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; endpoints resolve settings through get_settings"""
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title="BizLedger Finance Engine",
        description="Profitability metrics and cash-flow forecasting for small businesses",
        version="0.1.0",
    )
    app.dependency_overrides[get_settings] = lambda: app_settings

    # Last added runs first
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(system.router, tags=["system"])
    app.include_router(finance.router, prefix="/v1", tags=["finance"])

    return app


app = create_app()
