from contextlib import asynccontextmanager
from functools import partial

from anyio import to_thread
from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import reset_engines
from app.infrastructure.default_attachments_table import run_provisioning
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Provision the master database when configured and drop pooled engines on shutdown."""

    if get_settings().provision_on_startup:
        await to_thread.run_sync(partial(run_provisioning, for_master=True))
    yield
    reset_engines()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
