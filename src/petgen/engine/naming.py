"""Name and description templating.

Templates are Jinja2 strings stored in the table asset.  Rendering only
interpolates traits that have already been resolved; the one draw spent on
naming is the choice of template.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Sequence

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from .errors import GenerationError
from .hash_stream import HashStream

_jinja = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=False,
)


@lru_cache(maxsize=256)
def _compile(source: str) -> Template:
    return _jinja.from_string(source)


def render(source: str, **context: Any) -> str:
    """Render a template, raising :class:`GenerationError` on any template
    problem (syntax error, unknown variable)."""
    try:
        return _compile(source).render(**context).strip()
    except TemplateError as exc:
        raise GenerationError(f"cannot render template {source!r}: {exc}") from exc


def choose_template(stream: HashStream, templates: Sequence[str]) -> str:
    """Consume one slot and return one of *templates*."""
    if not templates:
        raise GenerationError("no templates to choose from")
    return templates[stream.next(len(templates))]
