"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request

from bizledger.config import Settings, settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    return settings


def get_today() -> date:
    """Reference date that forecasts are projected from"""
    return date.today()
