"""
FastAPI application entry point for the catalog service.
"""

from __future__ import annotations

from fastapi import FastAPI

from catalog.config import get_settings
from catalog.routes import router


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Profession Catalog", version="0.1.0")
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
