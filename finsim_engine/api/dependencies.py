"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from finsim_engine.infrastructure.clients.advisor import AdvisorClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_advisor_client() -> AdvisorClient:
    """Provide advice service client instance"""
    return AdvisorClient()
