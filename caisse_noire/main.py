from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger

from caisse_noire.api.errors import register_exception_handlers
from caisse_noire.api.sanctions import router as sanctions_router
from caisse_noire.api.teams import router as teams_router
from caisse_noire.api.users import router as users_router
from caisse_noire.core.logger import setup_logger
from caisse_noire.core.settings import settings
from caisse_noire.db.models import Base
from caisse_noire.db.session import get_engine

setup_logger(level=settings.log_level, log_file=settings.log_file, serialize=settings.log_json)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Ensure database tables exist before serving requests."""
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables verified")
    yield


app = FastAPI(title="Caisse Noire", lifespan=lifespan)

register_exception_handlers(app)

app.include_router(teams_router)
app.include_router(users_router)
app.include_router(sanctions_router)

logger.info("FastAPI application initialized")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response
