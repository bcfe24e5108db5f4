from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from jsstyle.api.dependencies import get_config, get_registry, reset_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    get_config()
    logger.info("Loaded %d rule(s)", len(get_registry()))
    yield
    reset_config()
