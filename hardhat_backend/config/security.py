import hmac
import logging
from typing import Optional

from fastapi import Request, Security
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader

from models.errors import Unauthorized

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
PROTECTED_PREFIX = "/api"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def keys_match(provided: Optional[str], expected: Optional[str]) -> bool:
    """Byte-for-byte, constant-time comparison. An unset server key matches nothing."""
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def is_protected(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def _authorized(request: Request, api_key: Optional[str]) -> bool:
    if keys_match(api_key, request.app.state.settings.api_key):
        return True
    logger.warning("Rejected %s %s: missing or invalid API key",
                   request.method, request.url.path)
    return False


async def api_key_middleware(request: Request, call_next):
    """Guard every /api path, including ones no route matches."""
    if is_protected(request.url.path) and not _authorized(request, request.headers.get(API_KEY_HEADER)):
        return JSONResponse(status_code=Unauthorized.status_code,
                            content={"error": Unauthorized.message})
    return await call_next(request)


async def require_api_key(request: Request, api_key: Optional[str] = Security(api_key_header)) -> bool:
    if not keys_match(api_key, request.app.state.settings.api_key):
        raise Unauthorized()
    return True
