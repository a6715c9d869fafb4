"""
RecipeBox Backend: Cookie Consent Resolver
==========================================

What:  Decides, per request, whether to ask a visitor for cookie consent,
       whether non-essential cookies are currently allowed, and which (if any)
       consent cookie to write on the response.
How:   A pure function over three strings: the consent cookie value, the
       `DNT` header and the `User-Agent` header. No I/O, no shared state.
Who:   Called by CookieConsentMiddleware once per request, and by the
       /api/consent routes when a visitor answers the prompt explicitly.

Decision Table (first matching row wins):

    cookie      DNT        crawler   │ ask    has     cookie write
    ─────────── ────────── ───────── ┼ ────── ─────── ─────────────────────────
    absent      "0"        -         │ False  True    none
    absent      other      -         │ False  False   none
    absent      absent     yes       │ False  False   none
    absent      absent     no        │ True   False   asked (session cookie)
    "asked"     -          -         │ False  True    true  (expires +1 year)
    "true"      -          -         │ False  True    none
    anything    -          -         │ False  False   none

Cookie lifecycle as seen by a browser:

    (none) ──first visit──▶ asked ──next visit──▶ true ──▶ true ...
                              │
                              └──explicit answer──▶ true | false (+1 year)
"""

import enum
import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


# ── Cookie Names & Values ─────────────────────────────────────────────────
CONSENT_COOKIE_NAME = "CookieConsent"
BANNER_HIDDEN_COOKIE_NAME = "CookieBannerHidden"

COOKIE_VALUE_ASKED = "asked"
COOKIE_VALUE_GRANTED = "true"
COOKIE_VALUE_DENIED = "false"

# Case-sensitive substrings identifying search-indexing agents.
# Crawlers are never prompted and never receive a consent cookie.
SEARCH_CRAWLERS = (
    "Baiduspider",
    "Googlebot",
    "YandexBot",
    "YandexImages",
    "bingbot",
    "msnbot",
    "Vagabondo",
    "SeznamBot",
    "ia_archiver",
    "AcoonBot",
    "Yahoo! Slurp",
    "AhrefsBot",
)


class ConsentCookieValue(str, enum.Enum):
    """Decoded value of the consent cookie."""

    ASKED = "asked"
    GRANTED = "granted"
    DENIED = "denied"
    ABSENT = "absent"


class DoNotTrack(str, enum.Enum):
    """Decoded `DNT` request header."""

    UNSET = "unset"
    TRACKING_ALLOWED = "tracking_allowed"
    TRACKING_DENIED = "tracking_denied"


def parse_consent_cookie(raw: Optional[str]) -> ConsentCookieValue:
    """Any present value other than "asked" or "true" counts as a denial."""
    if raw is None:
        return ConsentCookieValue.ABSENT
    if raw == COOKIE_VALUE_ASKED:
        return ConsentCookieValue.ASKED
    if raw == COOKIE_VALUE_GRANTED:
        return ConsentCookieValue.GRANTED
    return ConsentCookieValue.DENIED


def parse_do_not_track(raw: Optional[str]) -> DoNotTrack:
    """An absent or empty header is unset; "0" allows tracking; anything else refuses it."""
    if not raw:
        return DoNotTrack.UNSET
    if raw == "0":
        return DoNotTrack.TRACKING_ALLOWED
    return DoNotTrack.TRACKING_DENIED


def is_search_crawler(user_agent: Optional[str]) -> bool:
    if not user_agent:
        return False
    return any(crawler in user_agent for crawler in SEARCH_CRAWLERS)


def one_year_after(moment: datetime) -> datetime:
    """Same calendar date next year; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        return moment.replace(year=moment.year + 1, day=28)


# ══════════════════════════════════════════════════════════════════════════
# Value Types
# ══════════════════════════════════════════════════════════════════════════


class ConsentState(BaseModel):
    """The decoded inputs of one request."""

    cookie_present: bool
    cookie_value: ConsentCookieValue
    do_not_track: DoNotTrack
    is_crawler: bool

    model_config = {"frozen": True}

    @classmethod
    def from_inputs(
        cls,
        cookie_value: Optional[str],
        dnt_header: Optional[str],
        user_agent: Optional[str],
    ) -> "ConsentState":
        return cls(
            cookie_present=cookie_value is not None,
            cookie_value=parse_consent_cookie(cookie_value),
            do_not_track=parse_do_not_track(dnt_header),
            is_crawler=is_search_crawler(user_agent),
        )


class CookieWrite(BaseModel):
    """
    Instruction to set one cookie on the outgoing response.

    `expires_at=None` produces a session cookie (dropped when the browser
    session ends); a timestamp produces a persistent cookie.
    """

    name: str
    value: str
    expires_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @property
    def is_session_cookie(self) -> bool:
        return self.expires_at is None


class ConsentDecision(BaseModel):
    """Outcome of resolving one request: two display flags and at most one cookie write."""

    ask_consent: bool
    has_consent: bool
    cookie_write: Optional[CookieWrite] = None

    model_config = {"frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Resolver
# ══════════════════════════════════════════════════════════════════════════


class ConsentService:
    """
    Stateless consent resolver.

    Methods:
        - resolve():              the per-request decision table above
        - build_consent_cookie(): terminal cookie for an explicit answer
        - build_banner_hidden_cookie(): session marker for a dismissed banner

    `now` is injectable on every method that stamps an expiry; it defaults
    to the current UTC time.
    """

    def resolve(
        self,
        cookie_value: Optional[str],
        dnt_header: Optional[str],
        user_agent: Optional[str],
        now: Optional[datetime] = None,
    ) -> ConsentDecision:
        """
        Resolve the consent decision for one request.

        Args:
            cookie_value: Raw consent cookie value, or None if the cookie was not sent
            dnt_header:   Raw `DNT` header, or None
            user_agent:   Raw `User-Agent` header, or None
            now:          Clock used for the one-year expiry of an upgraded cookie

        Returns:
            ConsentDecision. Never raises.
        """
        state = ConsentState.from_inputs(cookie_value, dnt_header, user_agent)
        return self.decide(state, now=now)

    def decide(self, state: ConsentState, now: Optional[datetime] = None) -> ConsentDecision:
        if not state.cookie_present:
            if state.do_not_track is not DoNotTrack.UNSET:
                granted = state.do_not_track is DoNotTrack.TRACKING_ALLOWED
                logger.debug("No consent cookie; honouring DNT header (consent=%s)", granted)
                return ConsentDecision(ask_consent=False, has_consent=granted)

            if state.is_crawler:
                logger.debug("No consent cookie; search crawler, not asking")
                return ConsentDecision(ask_consent=False, has_consent=False)

            logger.debug("First visit without DNT; asking for consent")
            return ConsentDecision(
                ask_consent=True,
                has_consent=False,
                cookie_write=CookieWrite(name=CONSENT_COOKIE_NAME, value=COOKIE_VALUE_ASKED),
            )

        if state.cookie_value is ConsentCookieValue.ASKED:
            # Returning visitor who saw the prompt and kept browsing: implicit consent
            logger.debug("Consent cookie 'asked' upgraded to persistent 'true'")
            return ConsentDecision(
                ask_consent=False,
                has_consent=True,
                cookie_write=self.build_consent_cookie(True, now=now),
            )

        return ConsentDecision(
            ask_consent=False,
            has_consent=state.cookie_value is ConsentCookieValue.GRANTED,
        )

    def build_consent_cookie(self, grant: bool, now: Optional[datetime] = None) -> CookieWrite:
        """
        Persistent `"true"`/`"false"` consent cookie expiring one year from `now`.

        The expiry is always UTC: naive datetimes are taken as UTC and aware
        ones are converted, since Set-Cookie dates must be GMT.
        """
        moment = now or datetime.now(timezone.utc)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        else:
            moment = moment.astimezone(timezone.utc)
        return CookieWrite(
            name=CONSENT_COOKIE_NAME,
            value=COOKIE_VALUE_GRANTED if grant else COOKIE_VALUE_DENIED,
            expires_at=one_year_after(moment),
        )

    def build_banner_hidden_cookie(self) -> CookieWrite:
        return CookieWrite(name=BANNER_HIDDEN_COOKIE_NAME, value="1")


def should_ask_consent(decision: Optional[ConsentDecision]) -> bool:
    """False when no decision was computed for the request."""
    return decision.ask_consent if decision is not None else False


def has_consent(decision: Optional[ConsentDecision]) -> bool:
    """False when no decision was computed for the request."""
    return decision.has_consent if decision is not None else False


consent_service = ConsentService()
