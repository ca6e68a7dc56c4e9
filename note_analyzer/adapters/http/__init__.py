"""
HTTP Adapters

Handlers that expose the core services as JSON endpoints.
"""
from .handlers import HTTPHandlers

__all__ = ["HTTPHandlers"]
