"""Simple HTTP client utilities using httpx.

A fresh :class:`httpx.AsyncClient` is opened for every call so no
connection pool outlives the event loop it was created on.  Callers
may pass a ``transport`` (for example :class:`httpx.MockTransport`)
to redirect traffic.

``timeout`` is applied twice: httpx enforces it on each connect, read
and write step, and :func:`asyncio.wait_for` caps the whole exchange so
a server trickling its body cannot hold a call open past the deadline.
The latter surfaces as :class:`asyncio.TimeoutError`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx


async def _send(
    method: str,
    url: str,
    *,
    json: Optional[Dict[str, Any]],
    headers: Optional[Dict[str, str]],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport],
) -> httpx.Response:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return await client.request(method, url, json=json, headers=headers)


async def post(
    url: str,
    json: Dict[str, Any],
    *,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Perform an asynchronous HTTP POST request."""
    return await asyncio.wait_for(
        _send("POST", url, json=json, headers=headers, timeout=timeout, transport=transport),
        timeout,
    )


async def get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Perform an asynchronous HTTP GET request."""
    return await asyncio.wait_for(
        _send("GET", url, json=None, headers=headers, timeout=timeout, transport=transport),
        timeout,
    )
