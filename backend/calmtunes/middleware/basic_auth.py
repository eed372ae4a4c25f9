import base64
import binascii
import secrets
from typing import Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from calmtunes.config import Settings
from calmtunes.logger import get_logger

logger = get_logger("basic_auth")

CHALLENGE = 'Basic realm="Secure Area"'


def parse_basic_credentials(header: Optional[str]) -> Optional[tuple[str, str]]:
    """'Basic base64(user:pass)' -> (user, pass), None if the header is unusable."""
    if not header or not header.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(header[len("Basic "):].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def _matches(given: str, expected: Optional[str]) -> bool:
    if expected is None:
        return False
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class BasicAuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.enabled = settings.basic_auth_enabled
        self.username = settings.basic_auth_user
        self.password = settings.basic_auth_pass

    async def dispatch(self, request: Request, call_next):
        # BASIC_AUTH_ENABLED 가 꺼져 있으면 모든 요청 통과
        if not self.enabled:
            return await call_next(request)

        credentials = parse_basic_credentials(request.headers.get("Authorization"))
        if credentials is not None:
            username, password = credentials
            if _matches(username, self.username) and _matches(password, self.password):
                return await call_next(request)

        logger.warning(f"Basic auth rejected for: {request.url.path}")
        return PlainTextResponse(
            "Authentication required",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": CHALLENGE},
        )
