import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ngo_reports.config import Settings, get_settings
from ngo_reports.infrastructure.database import Database
from ngo_reports.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and upload directory on startup and release the engine on shutdown."""

    app.state.database.initialize()
    app.state.settings.upload_dir.mkdir(parents=True, exist_ok=True)
    yield
    app.state.database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="NGO Reports API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    # A single '*' allows any origin, otherwise only the configured ones.
    allow_all = settings.allowed_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.allowed_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
