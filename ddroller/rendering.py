"""Shared Jinja2 templates instance for all routers."""

from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ddroller.formatting import (
    dice_basis,
    format_modifier,
    format_success,
    verdict_label,
    verdict_short,
)
from ddroller.slugs import encode_identifier

_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html", "xml"]),
)
_env.filters.update(
    {
        "modifier": format_modifier,
        "success": format_success,
        "verdict_label": verdict_label,
        "verdict_short": verdict_short,
        "dice_basis": dice_basis,
        "slug": encode_identifier,
    }
)

templates = Jinja2Templates(env=_env)
