"""
Tools — the client surface.

client.py binds discovery descriptions to a Transport:
GoogleApis().drive("v2").files.list(q="...").execute()
"""

from .client import ApiClient, ApiRequest, BoundMethod, BoundResource, GoogleApis

__all__ = ["ApiClient", "ApiRequest", "BoundMethod", "BoundResource", "GoogleApis"]
