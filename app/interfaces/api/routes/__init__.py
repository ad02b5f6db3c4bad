from fastapi import FastAPI

from .default_attachments import router as default_attachments_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(default_attachments_router)
