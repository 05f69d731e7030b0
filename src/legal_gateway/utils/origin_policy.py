"""Declarative CORS origin policy.

Allowed origins are a list of patterns: ``*`` allows everything, a plain
origin must match exactly, and shell-style wildcards such as
``https://*.example.com`` match subdomains.  Matching is done by the pure
:func:`is_origin_allowed` so it can be tested without a running app.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any, Iterable, Sequence

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp


def _normalise(origin: str) -> str:
    return origin.strip().rstrip("/").lower()


def is_origin_allowed(origin: str | None, patterns: Iterable[str]) -> bool:
    """Return True when ``origin`` matches one of ``patterns``."""
    if not origin:
        return False
    candidate = _normalise(origin)
    for pattern in patterns:
        pattern = _normalise(pattern)
        if not pattern:
            continue
        if pattern == "*":
            return True
        if "*" in pattern or "?" in pattern:
            if fnmatchcase(candidate, pattern):
                return True
        elif candidate == pattern:
            return True
    return False


class OriginPolicyCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that delegates origin checks to :func:`is_origin_allowed`.

    The allowed origin is always echoed back explicitly (never ``*``) so
    credentialed requests keep working.
    """

    def __init__(self, app: ASGIApp, origin_patterns: Sequence[str] = (), **kwargs: Any) -> None:
        kwargs.pop("allow_origins", None)
        kwargs.pop("allow_origin_regex", None)
        super().__init__(app, allow_origins=(), **kwargs)
        self.origin_patterns = list(origin_patterns)

    def is_allowed_origin(self, origin: str) -> bool:
        return is_origin_allowed(origin, self.origin_patterns)
