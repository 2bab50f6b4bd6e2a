"""Pydantic models for the JSON roll feed."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ddroller.evaluator import Verdict
from ddroller.models import RollRecord
from ddroller.slugs import encode_identifier


class RollRequestOut(BaseModel):
    count: int
    sides: int
    modifier: int
    success: int = Field(
        description="0 for no threshold; negative to succeed at or below its absolute value."
    )
    text: str


class RollResultOut(BaseModel):
    rolls: list[int]
    total: int
    verdict: Verdict


class RollRecordOut(BaseModel):
    seq_id: int
    slug: str
    user: str
    time: datetime
    request: RollRequestOut
    result: RollResultOut

    @classmethod
    def from_record(cls, record: RollRecord) -> RollRecordOut:
        return cls(
            seq_id=record.seq_id,
            slug=encode_identifier(record.seq_id),
            user=record.user,
            time=record.created_at,
            request=RollRequestOut(
                count=record.count,
                sides=record.sides,
                modifier=record.modifier,
                success=record.success,
                text=record.text,
            ),
            result=RollResultOut(
                rolls=record.rolls,
                total=record.total,
                verdict=record.verdict,
            ),
        )
