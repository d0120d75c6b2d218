"""FastAPI application for the English-Vietnamese dictionary."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Adapters read their settings at import time
load_dotenv()

# src/ is two levels above this file
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import admin, dictionary, health
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

SERVICE_NAME = "English-Vietnamese Dictionary API"


def _read_version() -> str:
    with open(_src_path.parent / "pyproject.toml", "rb") as f:
        return tomllib.load(f)["project"]["version"]


def _cors_settings() -> tuple[list[str], bool]:
    """Origins and whether credentials are allowed.

    Browsers reject credentials with a wildcard origin, so credentials are
    only enabled for an explicit comma-separated CORS_ORIGINS list.
    """
    raw = os.getenv("CORS_ORIGINS", "*")
    if raw == "*":
        logger.warning("CORS allows any origin; set CORS_ORIGINS in production")
        return ["*"], False
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    logger.info("CORS restricted to configured origins", extra={"origins": origins})
    return origins, True


VERSION = _read_version()


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = get_mongodb_client()
    if client is None:
        logger.warning("MongoDB unavailable at startup, indexes not verified")
    elif ensure_all_indexes(client[DATABASE_NAME]):
        logger.info("Dictionary indexes verified")
    else:
        logger.warning("Some dictionary indexes could not be created")
    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Stored English-Vietnamese entries with LLM fallback, pronunciation audio and translation",
    version=VERSION,
    lifespan=lifespan,
)

_origins, _allow_credentials = _cors_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dictionary.router)
app.include_router(admin.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"service": SERVICE_NAME, "version": VERSION, "status": "running"}


if __name__ == "__main__":
    import uvicorn
    # Request logging comes from the structured app logs
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)), access_log=False)
