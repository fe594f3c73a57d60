import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bloqit.infrastructure.config import Settings
from bloqit.infrastructure.database import Database
from bloqit.infrastructure.seed import seed_database
from bloqit.presentation.routers import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the API around an explicitly owned Database handle.

    The handle is opened (tables created, optional seed applied) on startup and disposed
    on shutdown; request handlers reach it through `app.state.database`.
    """
    if settings is None:
        from bloqit.infrastructure.config import settings

    logging.basicConfig(level=settings.log_level.upper())
    database = database or Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        if settings.seed_path is not None:
            db = database.session()
            try:
                seed_database(db, settings.seed_path)
            finally:
                db.close()
        logger.info("Bloqit API started")
        yield
        database.dispose()
        logger.info("Bloqit API stopped")

    app = FastAPI(title="Bloqit", lifespan=lifespan)
    app.state.database = database
    app.include_router(router)
    return app


app = create_app()
