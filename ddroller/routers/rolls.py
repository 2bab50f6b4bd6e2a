"""Roll routes: perform a roll, show a stored roll, and the JSON roll feed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from ddroller.config import settings
from ddroller.database import get_db
from ddroller.dependencies import get_current_user, get_random_source
from ddroller.evaluator import RandomSource, evaluate
from ddroller.models import ROLLS_COUNTER, RollRecord
from ddroller.notation import NotationError, parse
from ddroller.rendering import templates
from ddroller.schemas import RollRecordOut
from ddroller.sequence import next_sequence_number
from ddroller.slugs import InvalidSlugError, decode_identifier, encode_identifier

logger = logging.getLogger(__name__)

router = APIRouter()

# seq_id is a signed 64-bit column; larger slugs decode fine but cannot exist.
_MAX_STORED_SEQ = 2**63 - 1


def _parse_int(value: str | None) -> int:
    """Parse an optional query parameter, treating junk as absent."""
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


async def _load_record(slug: str, db: AsyncSession) -> RollRecord:
    try:
        seq_id = decode_identifier(slug)
    except InvalidSlugError:
        raise HTTPException(status_code=404, detail="Roll not found")
    if seq_id > _MAX_STORED_SEQ:
        raise HTTPException(status_code=404, detail="Roll not found")
    result = await db.execute(select(RollRecord).where(RollRecord.seq_id == seq_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise HTTPException(status_code=404, detail="Roll not found")
    return record


@router.get("/roll/{notation}", response_class=HTMLResponse)
async def perform_roll(
    notation: str,
    request: Request,
    user: str = Depends(get_current_user),
    rng: RandomSource = Depends(get_random_source),
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Parse and roll ``notation``, store the result, and show it."""
    try:
        spec = parse(notation)
    except NotationError as exc:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": exc.message, "notation": notation},
            status_code=400,
        )

    outcome = evaluate(spec, rng)
    seq_id = await next_sequence_number(ROLLS_COUNTER, db)
    record = RollRecord.from_roll(spec, outcome, user=user, seq_id=seq_id)
    db.add(record)
    await db.commit()
    logger.info(
        "Stored roll %s for %s: %r -> %d", encode_identifier(seq_id), user, spec.text, outcome.total
    )

    return templates.TemplateResponse(
        request,
        "roll.html",
        {"record": record, "permalink": False},
    )


@router.get("/rolled/{slug}", response_class=HTMLResponse)
async def roll_permalink(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Show a previously stored roll."""
    record = await _load_record(slug, db)
    return templates.TemplateResponse(
        request,
        "roll.html",
        {"record": record, "permalink": True},
    )


@router.get("/api/rolls/{slug}")
async def roll_json(slug: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    record = await _load_record(slug, db)
    return JSONResponse(RollRecordOut.from_record(record).model_dump(mode="json"))


@router.get("/rolls.json")
async def roll_feed(
    user: str | None = None,
    since: str | None = None,
    n: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Return recent rolls server-wide.

    ``user`` restricts the feed to one user. With ``since`` (a sequence
    number) only newer records are returned, oldest first; without it the
    most recent records come first. ``n`` may lower the page size below
    ``settings.roll_list_limit``. Unparseable numbers are ignored, and any
    nonzero ``since`` (even a negative one) selects the oldest-first listing.
    """
    limit = settings.roll_list_limit
    requested = _parse_int(n)
    if 0 < requested < limit:
        limit = requested

    query = select(RollRecord)
    if user:
        query = query.where(RollRecord.user == user)
    since_seq = max(-_MAX_STORED_SEQ, min(_parse_int(since), _MAX_STORED_SEQ))
    if since_seq != 0:
        query = query.where(RollRecord.seq_id > since_seq).order_by(RollRecord.seq_id.asc())
    else:
        query = query.order_by(RollRecord.seq_id.desc())

    result = await db.execute(query.limit(limit))
    records = result.scalars().all()
    return JSONResponse([RollRecordOut.from_record(r).model_dump(mode="json") for r in records])
