"""
RecipeBox Backend: Cookie Consent Middleware
============================================

What:  Runs the consent resolver once per request, before routing.
How:   Reads the consent cookie, `DNT` and `User-Agent` headers, stores the
       resulting ConsentDecision on `request.state.cookie_consent`, and applies
       the decision's cookie write (if any) to the outgoing response.
Who:   Applied to every request except health and documentation endpoints.

Route handlers read the decision through `get_consent_decision()` and thread
it into their responses explicitly; nothing is kept in global state.

If a handler already set the consent cookie (an explicit answer via
POST /api/consent), the resolver's own write for that request is skipped so
the response never carries two conflicting consent cookies.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.services.consent_service import (
    CONSENT_COOKIE_NAME,
    ConsentDecision,
    CookieWrite,
    consent_service,
)

logger = logging.getLogger(__name__)


def apply_cookie_write(response: Response, write: CookieWrite) -> None:
    """Translate a CookieWrite into a Set-Cookie header using the configured attributes."""
    response.set_cookie(
        key=write.name,
        value=write.value,
        expires=write.expires_at,
        path=settings.consent_cookie_path,
        secure=settings.consent_cookie_secure,
        httponly=settings.consent_cookie_httponly,
        samesite=settings.consent_cookie_samesite,
    )


def response_sets_cookie(response: Response, name: str) -> bool:
    prefix = f"{name}="
    return any(
        header.startswith(prefix) for header in response.headers.getlist("set-cookie")
    )


def get_consent_decision(request: Request) -> Optional[ConsentDecision]:
    """The decision computed for this request, or None on excluded paths."""
    return getattr(request.state, "cookie_consent", None)


class CookieConsentMiddleware(BaseHTTPMiddleware):
    """
    Per-request cookie-consent resolution.

    OPTIONS requests are never resolved and never receive a cookie.

    Excluded paths:
        - /health: probes must not collect cookies
        - /docs, /openapi.json, /redoc: documentation
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS" or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        decision = consent_service.resolve(
            cookie_value=request.cookies.get(CONSENT_COOKIE_NAME),
            dnt_header=request.headers.get("DNT"),
            user_agent=request.headers.get("User-Agent"),
        )
        request.state.cookie_consent = decision

        response = await call_next(request)

        write = decision.cookie_write
        if write is not None:
            if response_sets_cookie(response, write.name):
                logger.debug("Handler set %s itself; skipping resolver write", write.name)
            else:
                apply_cookie_write(response, write)

        return response
