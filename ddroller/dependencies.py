"""FastAPI dependencies for ddroller."""

from __future__ import annotations

import random

from ddroller.config import settings
from ddroller.evaluator import RandomSource


def get_current_user() -> str:
    """Return the name recorded on new rolls.

    There are no accounts yet; every roll belongs to the configured
    placeholder user.
    """
    return settings.default_user


def get_random_source() -> RandomSource:
    """Return a freshly seeded generator for one request.

    Each request gets its own instance so concurrent handlers never share
    generator state. Tests override this with a fixed sequence.
    """
    return random.Random()
