# capnz/main.py
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

# Load <repo>/.env (main.py is <repo>/capnz/main.py)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from capnz.core.settings import settings
from capnz.api import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CAP-NZ Features", version="1.0.0")

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(api_router)

logger.info("[app] CAP-NZ feed: %s", settings.rss_url)
