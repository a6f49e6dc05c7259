"""API v1: all routes under /api/v1."""

from newsecho.api.v1.router import api_router

__all__ = ["api_router"]
