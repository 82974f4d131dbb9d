"""Path templates — compile ``/posts/:slug`` style patterns into URL builders.

Patterns mix static text with named parameters:

    "/about"                 -> static only
    "/posts/:slug"           -> required parameter ``slug``
    "/:locale?/posts/:slug"  -> optional ``locale``; when absent the
                                parameter and its leading ``/`` are dropped

Parameter values are percent-encoded when a URL is built.  Any object with
``compile()`` and ``required_param_names()`` can stand in for
``PathTemplater`` (see ``ContentSitemap(templater=...)``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

from contentmap._errors import PatternMismatch

# A parameter with an optional "/" or "." prefix and an optional "?" modifier
_PARAM_RE = re.compile(r"([/.])?:([A-Za-z_][A-Za-z0-9_]*)(\?)?")


@dataclass(frozen=True, slots=True)
class PatternToken:
    """A parsed piece of a path pattern.

    Static:    ``/posts``  (name=None)
    Required:  ``/:slug``  (name="slug", prefix="/")
    Optional:  ``/:page?`` (name="page", prefix="/", optional=True)
    """

    value: str
    name: str | None = None
    prefix: str = ""
    optional: bool = False

    @property
    def is_param(self) -> bool:
        return self.name is not None


def parse_pattern(pattern: str) -> tuple[PatternToken, ...]:
    """Parse a pattern string into static and parameter tokens.

    Examples::

        "/posts/:slug" -> (PatternToken("/posts"), PatternToken("/:slug", "slug", "/"))

    """
    tokens: list[PatternToken] = []
    pos = 0
    for match in _PARAM_RE.finditer(pattern):
        if match.start() > pos:
            tokens.append(PatternToken(value=pattern[pos:match.start()]))
        prefix, name, modifier = match.groups()
        tokens.append(
            PatternToken(
                value=match.group(0),
                name=name,
                prefix=prefix or "",
                optional=modifier == "?",
            )
        )
        pos = match.end()
    if pos < len(pattern):
        tokens.append(PatternToken(value=pattern[pos:]))
    return tuple(tokens)


def _encode(name: str, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        msg = f'Expected "{name}" to be a string or number, got {type(value).__name__}'
        raise PatternMismatch(msg)
    return quote(str(value), safe="")


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


@runtime_checkable
class PathTemplater(Protocol):
    """Compiles patterns into URL builders and lists their required names."""

    def compile(self, pattern: str) -> Callable[[Mapping[str, Any]], str]: ...

    def required_param_names(self, pattern: str) -> frozenset[str]: ...


class PathTemplate:
    """Default templater for ``:name`` patterns.

    Parsed patterns are cached, so compiling the same pattern for every
    template in a pass costs one parse.
    """

    def compile(self, pattern: str) -> Callable[[Mapping[str, Any]], str]:
        """Return a function building a URL from named parameters.

        The builder raises ``PatternMismatch`` when a required parameter is
        missing or empty, or when a value is not a string or number.
        """
        tokens = _parse_cached(pattern)

        def to_url(params: Mapping[str, Any]) -> str:
            parts: list[str] = []
            for token in tokens:
                if not token.is_param:
                    parts.append(token.value)
                    continue
                value = params.get(token.name)  # type: ignore[arg-type]
                if _is_missing(value):
                    if token.optional:
                        continue
                    msg = f'Expected "{token.name}" to be defined for pattern {pattern!r}'
                    raise PatternMismatch(msg)
                parts.append(token.prefix + _encode(token.name, value))  # type: ignore[arg-type]
            return "".join(parts)

        return to_url

    def required_param_names(self, pattern: str) -> frozenset[str]:
        """Names that must be supplied for the pattern to build."""
        return frozenset(
            t.name for t in _parse_cached(pattern) if t.name is not None and not t.optional
        )

    def param_names(self, pattern: str) -> tuple[str, ...]:
        """All parameter names in pattern order, optional ones included."""
        return tuple(t.name for t in _parse_cached(pattern) if t.name is not None)


@lru_cache(maxsize=256)
def _parse_cached(pattern: str) -> tuple[PatternToken, ...]:
    return parse_pattern(pattern)
