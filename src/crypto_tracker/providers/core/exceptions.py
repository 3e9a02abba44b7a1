"""Exceptions raised by providers that callers treat as a failed fetch."""
import asyncio

import httpx

# Failed fetches are logged and the previous state kept; anything else (bugs,
# cancellation) propagates.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
    httpx.HTTPError,
)
