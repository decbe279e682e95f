"""The one httpx client used for every TMDB request.

Each discovery page triggers a detail lookup per movie, so keeping the
connections alive between requests matters more than it would for a single
call.
"""

import httpx

from moviebot.constants import HTTPX_TIMEOUT

# A discovery page has 20 results, fetched concurrently
_TMDB_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=10, keepalive_expiry=30)

_tmdb_client: httpx.AsyncClient | None = None


def get_tmdb_client() -> httpx.AsyncClient:
    """Return the shared TMDB client, creating it on first use."""
    global _tmdb_client
    if _tmdb_client is None:
        _tmdb_client = httpx.AsyncClient(timeout=HTTPX_TIMEOUT, limits=_TMDB_LIMITS)
    return _tmdb_client


async def close_tmdb_client() -> None:
    """Close the shared client; the next ``get_tmdb_client`` opens a new one."""
    global _tmdb_client
    if _tmdb_client is not None:
        await _tmdb_client.aclose()
        _tmdb_client = None
