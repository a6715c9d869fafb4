"""
RecipeBox Backend: Cookie Consent Route Handlers
================================================

What:  GET/POST /api/consent and POST /api/consent/hide-banner.
How:   Reads the decision CookieConsentMiddleware stored for this request;
       explicit answers build their own cookie through ConsentService.

Endpoints:
    GET  /api/consent              current display flags
    POST /api/consent              explicit answer, persistent cookie (+1 year)
    POST /api/consent/hide-banner  dismiss the banner for the browser session
"""

import logging

from fastapi import APIRouter, Request, Response

from app.middleware.cookie_consent import apply_cookie_write, get_consent_decision
from app.schemas.common import ErrorResponse
from app.schemas.consent import ConsentAnswerRequest, ConsentStatusResponse
from app.services.consent_service import (
    BANNER_HIDDEN_COOKIE_NAME,
    consent_service,
    has_consent,
    should_ask_consent,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Consent"])


def build_consent_status(request: Request) -> ConsentStatusResponse:
    """Display flags for the current request, defaulting to False when unresolved."""
    decision = get_consent_decision(request)
    return ConsentStatusResponse(
        ask_consent=should_ask_consent(decision),
        has_consent=has_consent(decision),
        banner_hidden=request.cookies.get(BANNER_HIDDEN_COOKIE_NAME) == "1",
    )


@router.get(
    "/consent",
    response_model=ConsentStatusResponse,
    summary="Current cookie-consent flags",
    description=(
        "Returns whether the consent banner should be shown and whether "
        "non-essential cookies are allowed for this visitor."
    ),
)
async def get_consent(request: Request) -> ConsentStatusResponse:
    return build_consent_status(request)


@router.post(
    "/consent",
    response_model=ConsentStatusResponse,
    responses={
        200: {"description": "Answer recorded", "model": ConsentStatusResponse},
        422: {"description": "Malformed body", "model": ErrorResponse},
    },
    summary="Record the visitor's answer to the consent prompt",
)
async def answer_consent(
    body: ConsentAnswerRequest,
    request: Request,
    response: Response,
) -> ConsentStatusResponse:
    """
    Persist an explicit answer.

    Writes `CookieConsent=true|false` with a one-year expiry. The middleware
    sees this cookie on the response and does not add its own.
    """
    apply_cookie_write(response, consent_service.build_consent_cookie(body.consent))
    logger.info("Explicit cookie consent recorded: %s", body.consent)

    return ConsentStatusResponse(
        ask_consent=False,
        has_consent=body.consent,
        banner_hidden=request.cookies.get(BANNER_HIDDEN_COOKIE_NAME) == "1",
    )


@router.post(
    "/consent/hide-banner",
    status_code=204,
    summary="Hide the consent banner for this browser session",
)
async def hide_banner() -> Response:
    response = Response(status_code=204)
    apply_cookie_write(response, consent_service.build_banner_hidden_cookie())
    return response
