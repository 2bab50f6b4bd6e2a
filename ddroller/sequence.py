"""Sequence number allocation for stored records."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ddroller.models import Counter

logger = logging.getLogger(__name__)


async def ensure_counter(name: str, db: AsyncSession) -> None:
    """Create the named counter at zero if it does not exist yet."""
    result = await db.execute(select(Counter).where(Counter.name == name))
    if result.scalar_one_or_none() is None:
        db.add(Counter(name=name, value=0))
        await db.flush()
        logger.info("Created counter %r", name)


async def next_sequence_number(name: str, db: AsyncSession) -> int:
    """Increment the named counter and return its new value.

    The increment and read happen in one UPDATE ... RETURNING statement, so
    concurrent callers never receive the same number. A missing counter is
    created starting at 1. The caller commits.
    """
    stmt = (
        update(Counter)
        .where(Counter.name == name)
        .values(value=Counter.value + 1)
        .returning(Counter.value)
        .execution_options(synchronize_session=False)
    )
    value = (await db.execute(stmt)).scalar_one_or_none()
    if value is None:
        db.add(Counter(name=name, value=1))
        await db.flush()
        logger.info("Created counter %r", name)
        return 1
    return value
