"""
Main FastAPI application for the usergraph service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_database_url, settings
from ..database.connection import test_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import UserStore

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    store: UserStore = app.state.store

    # Startup
    logger.info("Starting usergraph API...")
    connected, error_message = await test_database_connection(store.engine)
    if not connected:
        logger.error("Database connection validation failed", error=error_message)
        raise RuntimeError(error_message)

    await store.init()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down usergraph API...")
    if app.state.owns_store:
        await store.close()


def create_app(store: UserStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: User store to serve. When omitted, one is created from the
            configured database URL and disposed on shutdown.
    """
    app = FastAPI(
        title="usergraph API",
        description="CRUD GraphQL service for users",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.owns_store = store is None
    app.state.store = store or UserStore.from_url(get_database_url(), echo=settings.sql_echo)

    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Fail fast: the server should not start with a broken schema
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "usergraph.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
