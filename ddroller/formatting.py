"""Display helpers registered as Jinja2 filters."""

from __future__ import annotations

import math

from ddroller.evaluator import Verdict

_VERDICT_LABELS: dict[Verdict, str] = {
    Verdict.succeeded: "SUCCESS",
    Verdict.failed: "FAILURE",
    Verdict.no_threshold: "RESULT",
}

_VERDICT_SHORT: dict[Verdict, str] = {
    Verdict.succeeded: "SUC",
    Verdict.failed: "FAIL",
    Verdict.no_threshold: "RES",
}


def format_modifier(modifier: int) -> str:
    """Format a modifier with an explicit sign, e.g. "+0", "+3", "-2"."""
    return f"{modifier:+d}"


def format_success(success: int) -> str:
    """Format a threshold with its direction after the number.

    "15+" succeeds at or above 15, "15-" at or below 15, and "∅" means no
    threshold was requested.
    """
    if success < 0:
        return f"{-success}-"
    if success == 0:
        return "∅"
    return f"{success}+"


def verdict_label(verdict: Verdict) -> str:
    return _VERDICT_LABELS[Verdict(verdict)]


def verdict_short(verdict: Verdict) -> str:
    return _VERDICT_SHORT[Verdict(verdict)]


def dice_basis(num_dice: int) -> int:
    """Return a CSS flex-basis percentage for one die in the dice box.

    Rows of dice stay short until there are many of them: the number per row
    grows with the square root of the count.
    """
    per_row = math.floor(math.sqrt(num_dice) * 1.5)
    if per_row <= 1:
        return 100
    return int(100 / per_row)
