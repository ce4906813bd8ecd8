"""FastAPI application entry point for Campus Ballot."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from structlog import get_logger

from campus_ballot import __version__
from campus_ballot.api.middleware.logging_middleware import LoggingMiddleware
from campus_ballot.api.routes.admin_sessions import router as admin_sessions_router
from campus_ballot.api.routes.eligibility import router as eligibility_router
from campus_ballot.api.routes.health import router as health_router
from campus_ballot.api.routes.metrics import router as metrics_router
from campus_ballot.api.routes.sessions import router as sessions_router
from campus_ballot.api.routes.votes import router as votes_router
from campus_ballot.bootstrap.ballot import get_engine_config, initialize_storage
from campus_ballot.bootstrap.database import close_database_engine
from campus_ballot.bootstrap.logging import configure_structlog
from campus_ballot.bootstrap.seed import seed_development_data

load_dotenv()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = get_engine_config()
    configure_structlog(config.environment)
    logger.info("application_starting", environment=config.environment)
    await initialize_storage()
    if config.environment == "development" and not config.database_url:
        await seed_development_data()
    yield
    await close_database_engine()
    logger.info("application_stopped")


app = FastAPI(
    title="Campus Ballot API",
    description="Vote admission and eligibility engine for campus elections",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(votes_router)
app.include_router(sessions_router)
app.include_router(eligibility_router)
app.include_router(admin_sessions_router)
