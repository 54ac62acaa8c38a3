"""Jinja2 environment for the HTML renderers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .formatting import format_duration_ms, format_timestamp, pluralize

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def template_environment() -> Environment:
    """Shared environment with autoescaping and the report filters registered."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "html.j2"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["format_duration"] = format_duration_ms
    env.filters["format_timestamp"] = format_timestamp
    env.filters["pluralize"] = pluralize
    return env
