from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from api import catalog, dictionaries, languages, training
from core.config import settings
from core.database import engine, Base
from core.logging import configure_logging, get_logger, SERVICE_VERSION
from core.middleware import RequestLoggingMiddleware, SlowRequestMiddleware
from core.errors import register_error_handlers
import models  # noqa: F401  registers tables on Base.metadata

# Initialize logging before anything else
configure_logging(
    level=settings.LOG_LEVEL,
    json_logs=settings.LOG_JSON,
    log_sql=settings.LOG_SQL,
)

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", message="Artikel API starting up")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("database_connected", message="Database tables initialized")
    except (SQLAlchemyError, OSError) as e:
        log.warning("database_unavailable", error=str(e), message="App starting without dictionary sharing")

    yield

    log.info("shutdown", message="Artikel API shutting down")
    training.get_registry().close_all()
    await engine.dispose()
    log.debug("database_disposed", message="Database connections closed")


app = FastAPI(
    title="Artikel API",
    description="German article trainer: der/die/das drills over leveled and custom dictionaries",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

register_error_handlers(app)

# Middleware (order matters: last added = first executed)
app.add_middleware(SlowRequestMiddleware, slow_threshold_ms=500)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(training.router, prefix="/api/training", tags=["training"])
app.include_router(dictionaries.router, prefix="/api/dictionaries", tags=["dictionaries"])
app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
app.include_router(languages.router, prefix="/api/languages", tags=["languages"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": SERVICE_VERSION}


if __name__ == "__main__":
    import uvicorn

    log.info("server_config", host=settings.BACKEND_HOST, port=settings.BACKEND_PORT, debug=settings.APP_DEBUG)
    uvicorn.run(
        "main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.APP_DEBUG,
        log_config=None,
    )
