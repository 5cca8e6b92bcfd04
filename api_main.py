"""ASGI entrypoint.

Run with:
    uvicorn api_main:app --port 8888
"""

from vibecheck.api.fastapi_app import app

__all__ = ["app"]
