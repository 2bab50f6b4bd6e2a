"""Roll evaluation: draw the dice for a RollSpec and judge the total."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol

from ddroller.notation import RollSpec


class RandomSource(Protocol):
    """Anything with an inclusive ``randint``, e.g. ``random.Random``."""

    def randint(self, a: int, b: int) -> int: ...


class Verdict(str, enum.Enum):
    """Outcome of a roll against its success threshold."""

    succeeded = "succeeded"
    failed = "failed"
    no_threshold = "no_threshold"


@dataclass(frozen=True)
class RollOutcome:
    """Individual dice in draw order, the modified total, and the verdict."""

    rolls: tuple[int, ...]
    total: int
    verdict: Verdict


def judge(total: int, success: int) -> Verdict:
    """Compare a total against a signed success threshold.

    Args:
        total: Sum of the dice plus modifier.
        success: 0 for no threshold; positive to succeed at or above it;
            negative to succeed at or below its absolute value.

    Returns:
        The Verdict for the roll.
    """
    if success == 0:
        return Verdict.no_threshold
    if success < 0:
        met = total <= -success
    else:
        met = total >= success
    return Verdict.succeeded if met else Verdict.failed


def evaluate(spec: RollSpec, rng: RandomSource) -> RollOutcome:
    """Roll the dice described by ``spec`` using ``rng``.

    The caller owns ``rng``; a generator shared between threads must be
    synchronized by the caller.
    """
    rolls = tuple(rng.randint(1, spec.sides) for _ in range(spec.count))
    total = sum(rolls) + spec.modifier
    return RollOutcome(rolls=rolls, total=total, verdict=judge(total, spec.success))
