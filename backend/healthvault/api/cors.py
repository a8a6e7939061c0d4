"""Cross-origin headers sent with every response."""

from starlette.requests import Request

from healthvault.config import settings

CORS_HEADERS = {
    "Access-Control-Allow-Origin": settings.cors_allow_origin,
    "Access-Control-Allow-Headers": ", ".join(settings.cors_allow_headers),
}


def is_preflight(request: Request) -> bool:
    return request.method == "OPTIONS" and "access-control-request-method" in request.headers
