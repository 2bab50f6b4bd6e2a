from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ddroller import models as _models  # noqa: F401 - registers models with Base.metadata
from ddroller.config import settings
from ddroller.database import AsyncSessionLocal, Base, engine
from ddroller.routers import pages, rolls
from ddroller.sequence import ensure_counter

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


async def _seed_counters() -> None:
    """Create the roll sequence counter if it doesn't already exist."""
    async with AsyncSessionLocal() as session:
        await ensure_counter(_models.ROLLS_COUNTER, session)
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await _seed_counters()
    yield


app = FastAPI(title="ddroller", debug=settings.debug, lifespan=lifespan)

app.mount(
    "/static",
    StaticFiles(directory=Path(__file__).parent / "static"),
    name="static",
)
app.include_router(pages.router)
app.include_router(rolls.router)
