"""Public roll identifiers.

Sequence numbers are shown to users as base-36 slugs, zero-padded to at
least MIN_SLUG_LENGTH characters. Slugs keep permalinks short and do not
reveal how many rolls have been made at a glance.
"""

from __future__ import annotations

import re
import string

MIN_SLUG_LENGTH = 4
MAX_SEQUENCE = 2**64 - 1

_DIGITS = string.digits + string.ascii_lowercase
_SLUG_RE = re.compile(r"[0-9a-zA-Z]+")
# Widest base-36 rendering of MAX_SEQUENCE.
_MAX_DIGITS = 13


class InvalidSlugError(ValueError):
    """Raised when a slug is not a base-36 encoded sequence number."""


def encode_identifier(seq_id: int) -> str:
    """Encode a sequence number as a slug.

    Raises:
        ValueError: If ``seq_id`` is negative or wider than 64 bits.
    """
    if seq_id < 0 or seq_id > MAX_SEQUENCE:
        raise ValueError(f"Sequence number out of range: {seq_id}")
    digits = []
    while seq_id:
        seq_id, rem = divmod(seq_id, 36)
        digits.append(_DIGITS[rem])
    slug = "".join(reversed(digits))
    return slug.rjust(MIN_SLUG_LENGTH, "0")


def decode_identifier(slug: str) -> int:
    """Decode a slug back to its sequence number.

    Padding is ignored and letters may be either case, so
    ``encode_identifier(decode_identifier(s))`` returns the canonical form
    of ``s``.

    Raises:
        InvalidSlugError: If ``slug`` is empty, contains a character outside
            0-9 and a-z, or decodes to more than 64 bits.
    """
    # int(x, 36) alone would also accept signs, whitespace and underscores.
    if not _SLUG_RE.fullmatch(slug):
        raise InvalidSlugError(f"Invalid roll id: {slug!r}")
    significant = slug.lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS:
        raise InvalidSlugError(f"Roll id out of range: {slug!r}")
    seq_id = int(significant, 36)
    if seq_id > MAX_SEQUENCE:
        raise InvalidSlugError(f"Roll id out of range: {slug!r}")
    return seq_id
