"""Dice notation parser.

Supports a single dice term with an optional modifier and success threshold:
XdY, XdY+Z, XdY-Z, XdY|T, XdY+Z|T+, XdY-Z|T-.

A threshold followed by ``-`` succeeds when the total is at or below it;
otherwise (no marker or ``+``) the total must be at or above it.

Examples: 2d20, 3d6+2|10, 1d20|15-.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ddroller.config import settings

logger = logging.getLogger(__name__)

_NOTATION_RE = re.compile(
    r"^(?P<count>\d+)d(?P<sides>\d+)(?P<mod>[+-]\d+)?"
    r"(?:\|(?P<success>\d+)(?P<direction>[+-])?)?$",
    re.IGNORECASE | re.ASCII,
)

# Modifier and threshold are stored in signed 64-bit columns.
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))


def _significant(digits: str) -> str:
    """Strip zero padding from a digit group, keeping a lone "0"."""
    return digits.lstrip("0") or "0"


def _stored_int(sign: str, digits: str) -> int | None:
    """Return the signed value of ``digits``, or None if it overflows storage."""
    if len(digits) > _INT64_DIGITS or int(digits) > _INT64_MAX:
        return None
    return -int(digits) if sign == "-" else int(digits)


@dataclass(frozen=True)
class RollSpec:
    """A validated roll request.

    Roll ``count`` dice with ``sides`` faces and add ``modifier``. A positive
    ``success`` is met by totals at or above it, a negative one by totals at
    or below its absolute value, and 0 means no threshold was requested.
    ``text`` is the request exactly as it was received.
    """

    count: int
    sides: int
    modifier: int = 0
    success: int = 0
    text: str = ""


class NotationError(ValueError):
    """Base class for rejected roll requests."""

    message = "Unknown error."

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(self.message)


class UnsupportedFormatError(NotationError):
    """The request is not in dice notation at all."""

    message = (
        "Your request was not in valid DnD roll syntax.\n"
        "Format your request in the style of 2d20,\n"
        "which rolls two dice with 20 sides each."
    )


class RequestTooLargeError(NotationError):
    """The request asks for more dice than the configured limit."""

    def __init__(self, text: str, count: str, limit: int) -> None:
        self.count = int(count) if len(count) <= _INT64_DIGITS else None
        self.limit = limit
        self.message = f"Cannot roll more than {limit} dice."
        super().__init__(text)


class UnsupportedDiceError(NotationError):
    """The request asks for a die shape outside the supported set."""

    def __init__(self, text: str, sides: str) -> None:
        self.sides = int(sides) if len(sides) <= _INT64_DIGITS else None
        self.message = f"Cannot roll dice with {sides} sides."
        super().__init__(text)


class NotationParser:
    """Parses dice notation against a count limit and a set of allowed dice.

    When a request breaks more than one rule the error reported follows a
    fixed precedence: format, then too many dice, then unsupported dice.
    """

    def __init__(self, count_limit: int, supported_sides: Iterable[int]) -> None:
        self.count_limit = count_limit
        self.supported_sides = frozenset(supported_sides)

    def parse(self, text: str) -> RollSpec:
        """Parse dice notation into a RollSpec.

        Args:
            text: Dice notation string, e.g. "2d20+3|15".

        Returns:
            The validated RollSpec; ``text`` is kept verbatim.

        Raises:
            UnsupportedFormatError: If the text is not valid notation, asks for
                zero dice, or has a modifier or threshold too wide to store.
            RequestTooLargeError: If more dice than the limit are requested.
            UnsupportedDiceError: If the die shape is not supported.
        """
        m = _NOTATION_RE.match(text.strip())
        if not m:
            raise UnsupportedFormatError(text)

        # Digit groups are sized before int() so zero padding is harmless and
        # no amount of digits can make conversion expensive.
        count = _significant(m.group("count"))
        sides = _significant(m.group("sides"))
        mod = m.group("mod") or "+0"
        modifier = _stored_int(mod[0], _significant(mod[1:]))
        success = _stored_int(m.group("direction") or "+", _significant(m.group("success") or "0"))

        if count == "0" or modifier is None or success is None:
            raise UnsupportedFormatError(text)
        if len(count) > len(str(self.count_limit)) or int(count) > self.count_limit:
            raise RequestTooLargeError(text, count, self.count_limit)
        if len(sides) > _INT64_DIGITS or int(sides) not in self.supported_sides:
            raise UnsupportedDiceError(text, sides)

        return RollSpec(
            count=int(count), sides=int(sides), modifier=modifier, success=success, text=text
        )


def default_parser() -> NotationParser:
    """Build a parser from the application settings."""
    return NotationParser(
        count_limit=settings.dice_count_limit,
        supported_sides=settings.supported_sides,
    )


def parse(text: str) -> RollSpec:
    """Parse ``text`` with the configured limits. See NotationParser.parse."""
    try:
        return default_parser().parse(text)
    except NotationError as exc:
        logger.debug("Rejected roll request %r: %s", text, type(exc).__name__)
        raise
