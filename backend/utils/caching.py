"""
ETag helpers for aggregate reads.

Signatures are computed from the aggregate as it is read, so any rating
write that changes a store's count, average or latest update time yields a
new ETag. Responses are marked no-cache: clients may keep a copy but must
revalidate before every use.
"""
import hashlib
from fastapi import Request, Response
from typing import Any

from constants import HTTPStatus

CACHE_CONTROL = "private, no-cache"


def make_signature(*parts: Any) -> str:
    """Generate a weak ETag from the given parts."""
    m = hashlib.sha256()
    for p in parts:
        m.update(str(p).encode("utf-8"))
        m.update(b"|")
    return f'W/"{m.hexdigest()[:32]}"'


def maybe_304(request: Request, etag: str) -> Response | None:
    """Return a 304 Not Modified response if the client's ETag still matches."""
    inm = request.headers.get("if-none-match")
    if inm and inm == etag:
        return Response(status_code=HTTPStatus.NOT_MODIFIED, headers=cache_headers(etag))
    return None


def cache_headers(etag: str) -> dict[str, str]:
    """Return revalidation headers for an ETag."""
    return {
        "ETag": etag,
        "Cache-Control": CACHE_CONTROL,
    }
