# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.database import create_db_and_tables
from app.dependencies import CART_TOKEN_HEADER

# cart_snapshots must be registered on SQLModel.metadata before create_all()
from app.models import cart as _cart_models  # noqa: F401

from app.routers import cart, chat, delivery, orders

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      - log which cart backend is active
      - with CART_STORAGE_BACKEND=database, make sure cart_snapshots exists

    Memory and file backends need no setup.
    """
    backend = settings.CART_STORAGE_BACKEND
    logger.info("Startup: carts stored in %s backend", backend)
    if backend == "database":
        try:
            create_db_and_tables()
        except Exception:
            logger.exception("Startup: could not prepare cart_snapshots table")
            raise
        logger.info("Startup: cart_snapshots table ready")
    yield
    logger.info("Shutdown: storefront API stopped")


app = FastAPI(
    title=settings.PROJECT_NAME or "SultaniElectro Storefront API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # the storefront reads a freshly issued cart token from responses
    expose_headers=[CART_TOKEN_HEADER],
)

for module in (cart, orders, delivery, chat):
    app.include_router(module.router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check."""
    return {"status": "ok", "service": "sultani-storefront"}
