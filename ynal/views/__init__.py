"""
Routes served by the application.
"""
from ynal.views.licenses import build_router

__all__ = ["build_router"]
