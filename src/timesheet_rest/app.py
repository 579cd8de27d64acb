"""
Timesheet REST API server
Timesheets, plus the projects and employees they refer to
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timesheet_rest import __version__
from timesheet_rest.config.settings import ALLOWED_ORIGINS, LOG_LEVEL
from timesheet_rest.database.connection import init_database, close_database
from timesheet_rest.api.routes import health, timesheets, projects, employees
from timesheet_rest.services.registry import RepositoryRegistry, build_postgres_registry
from timesheet_rest.utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(repositories: Optional[RepositoryRegistry] = None) -> FastAPI:
    """
    Build the FastAPI application.

    With ``repositories`` given, requests are served from them and no
    database connection is opened. Otherwise the lifespan opens the asyncpg
    pool from DATABASE_URL and builds PostgreSQL repositories on it.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.repositories is not None:
            yield
            return

        pool = await init_database()
        app.state.db_pool = pool
        app.state.repositories = build_postgres_registry(pool)
        try:
            yield
        finally:
            app.state.repositories = None
            app.state.db_pool = None
            await close_database(pool)

    app = FastAPI(
        title="Timesheet REST API",
        description="CRUD API for timesheets, projects and employees",
        version=__version__,
        lifespan=lifespan
    )
    app.state.repositories = repositories
    app.state.db_pool = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(timesheets.router, prefix="/timesheets", tags=["Timesheets"])
    app.include_router(projects.router, prefix="/projects", tags=["Projects"])
    app.include_router(employees.router, prefix="/employees", tags=["Employees"])

    return app
