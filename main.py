from fastapi import FastAPI
from contextlib import asynccontextmanager
from config.database import engine, Base, check_db_connection
from config.logging_config import setup_logging
from config.middleware import add_cors_middleware
from config.settings import warn_on_insecure_defaults
import listings.models  # noqa: F401  registers the listing tables on Base
import listings.router
import logging
import time

# ------------- Logging -------------
setup_logging()
logger = logging.getLogger(__name__)

warn_on_insecure_defaults()


# ------------- Lifespan -------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    logger.info("Listing service starting up...")
    Base.metadata.create_all(bind=engine)

    yield

    logger.info("Listing service shutting down...")
    engine.dispose()


# ------------- Create app -------------
app = FastAPI(title="Futsal Listing Service", lifespan=lifespan)

# ------------- CORS -------------
add_cors_middleware(app)

# ------------- Routers -------------
app.include_router(listings.router.router)


# ------------- Health endpoints -------------
@app.get("/health")
def health_check():
    db_connected = check_db_connection()
    return {
        "status": "Listing service is healthy" if db_connected else "Listing service is degraded",
        "database_connected": db_connected,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
    }


@app.get("/")
def read_root():
    return {"message": "Listing service is running"}
