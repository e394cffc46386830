"""API v1: router, dependencies, endpoints."""

from care_access.api.v1.router import api_router

__all__ = ["api_router"]
