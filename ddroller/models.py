"""SQLAlchemy ORM models for stored rolls."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from ddroller.database import Base
from ddroller.evaluator import RollOutcome, Verdict
from ddroller.notation import RollSpec

ROLLS_COUNTER = "rolls"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always loads as UTC.

    SQLite drops the offset on storage, so naive values read back are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


# ---------------------------------------------------------------------------
# Timestamp mixin
# ---------------------------------------------------------------------------


class TimestampMixin:
    """Adds a created_at column to any model."""

    # Filled client-side as well so new rows can be rendered without a refresh.
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow, server_default=func.now(), nullable=False
    )


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Counter(Base):
    """A named, monotonically increasing counter."""

    __tablename__ = "counters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class RollRecord(TimestampMixin, Base):
    """A performed roll: the request, its outcome, and who rolled it."""

    __tablename__ = "rolls"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    seq_id: Mapped[int] = mapped_column(BigInteger, unique=True, index=True, nullable=False)
    user: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Request
    count: Mapped[int] = mapped_column(Integer, nullable=False)
    sides: Mapped[int] = mapped_column(Integer, nullable=False)
    modifier: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    success: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # Result
    rolls: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    total: Mapped[int] = mapped_column(BigInteger, nullable=False)
    verdict: Mapped[Verdict] = mapped_column(
        Enum(Verdict, native_enum=False), nullable=False, default=Verdict.no_threshold
    )

    @classmethod
    def from_roll(
        cls, spec: RollSpec, outcome: RollOutcome, *, user: str, seq_id: int
    ) -> RollRecord:
        return cls(
            seq_id=seq_id,
            user=user,
            count=spec.count,
            sides=spec.sides,
            modifier=spec.modifier,
            success=spec.success,
            text=spec.text,
            rolls=list(outcome.rolls),
            total=outcome.total,
            verdict=outcome.verdict,
        )

    @property
    def spec(self) -> RollSpec:
        return RollSpec(
            count=self.count,
            sides=self.sides,
            modifier=self.modifier,
            success=self.success,
            text=self.text,
        )

    @property
    def outcome(self) -> RollOutcome:
        return RollOutcome(rolls=tuple(self.rolls), total=self.total, verdict=self.verdict)
