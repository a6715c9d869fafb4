"""
RecipeBox Backend: Consent Resolver Unit Tests
==============================================

What:  Tests for the cookie-consent decision table in ConsentService.
How:   Pure function calls with a fixed clock; no HTTP, no database.

What we test:
    ✅ First visit, DNT 0/1, crawlers (no cookie present)
    ✅ Cookie values asked / true / anything else
    ✅ One-year expiry, including Feb 29 and non-UTC clocks
    ✅ Round trip through a client converges on "true"
    ✅ Explicit answer cookies and the default accessors
"""

from datetime import datetime, timedelta, timezone

import pytest
from starlette.responses import Response

from app.middleware.cookie_consent import apply_cookie_write
from app.services.consent_service import (
    BANNER_HIDDEN_COOKIE_NAME,
    CONSENT_COOKIE_NAME,
    SEARCH_CRAWLERS,
    ConsentCookieValue,
    ConsentDecision,
    ConsentService,
    ConsentState,
    DoNotTrack,
    has_consent,
    is_search_crawler,
    one_year_after,
    parse_consent_cookie,
    parse_do_not_track,
    should_ask_consent,
)

BROWSER_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


class TestDecoding:
    """Raw strings to ConsentState fields."""

    def test_cookie_values(self):
        assert parse_consent_cookie(None) is ConsentCookieValue.ABSENT
        assert parse_consent_cookie("asked") is ConsentCookieValue.ASKED
        assert parse_consent_cookie("true") is ConsentCookieValue.GRANTED
        assert parse_consent_cookie("false") is ConsentCookieValue.DENIED
        assert parse_consent_cookie("TRUE") is ConsentCookieValue.DENIED
        assert parse_consent_cookie("") is ConsentCookieValue.DENIED

    def test_dnt_values(self):
        assert parse_do_not_track(None) is DoNotTrack.UNSET
        assert parse_do_not_track("") is DoNotTrack.UNSET
        assert parse_do_not_track("0") is DoNotTrack.TRACKING_ALLOWED
        assert parse_do_not_track("1") is DoNotTrack.TRACKING_DENIED
        assert parse_do_not_track("yes") is DoNotTrack.TRACKING_DENIED

    @pytest.mark.parametrize("crawler", SEARCH_CRAWLERS)
    def test_every_listed_crawler_matches(self, crawler):
        assert is_search_crawler(f"Mozilla/5.0 (compatible; {crawler}/2.1; +http://example.com)")

    def test_crawler_match_is_case_sensitive(self):
        assert not is_search_crawler("Mozilla/5.0 (compatible; googlebot/2.1)")
        assert not is_search_crawler("BINGBOT")

    def test_missing_user_agent_is_not_a_crawler(self):
        assert not is_search_crawler(None)
        assert not is_search_crawler("")
        assert not is_search_crawler(BROWSER_UA)

    def test_state_from_inputs(self):
        state = ConsentState.from_inputs(None, "1", "Googlebot")
        assert state.cookie_present is False
        assert state.cookie_value is ConsentCookieValue.ABSENT
        assert state.do_not_track is DoNotTrack.TRACKING_DENIED
        assert state.is_crawler is True


class TestResolveWithoutCookie:
    """Branch 1: the request carries no consent cookie."""

    def setup_method(self):
        self.service = ConsentService()

    def test_first_visit_asks_and_writes_session_cookie(self):
        decision = self.service.resolve(None, None, BROWSER_UA)

        assert decision.ask_consent is True
        assert decision.has_consent is False
        assert decision.cookie_write is not None
        assert decision.cookie_write.name == CONSENT_COOKIE_NAME
        assert decision.cookie_write.value == "asked"
        assert decision.cookie_write.expires_at is None
        assert decision.cookie_write.is_session_cookie

    def test_first_visit_without_user_agent_still_asks(self):
        decision = self.service.resolve(None, None, None)
        assert decision.ask_consent is True
        assert decision.cookie_write.value == "asked"

    def test_empty_dnt_is_treated_as_absent(self):
        decision = self.service.resolve(None, "", BROWSER_UA)
        assert decision.ask_consent is True

    def test_dnt_zero_grants_consent(self):
        decision = self.service.resolve(None, "0", BROWSER_UA)
        assert decision == ConsentDecision(ask_consent=False, has_consent=True)

    def test_dnt_one_denies_consent(self):
        decision = self.service.resolve(None, "1", BROWSER_UA)
        assert decision == ConsentDecision(ask_consent=False, has_consent=False)

    def test_unrecognised_dnt_denies_consent(self):
        decision = self.service.resolve(None, "maybe", BROWSER_UA)
        assert decision.ask_consent is False
        assert decision.has_consent is False
        assert decision.cookie_write is None

    def test_dnt_takes_precedence_over_crawler(self):
        decision = self.service.resolve(None, "0", "Googlebot/2.1")
        assert decision.has_consent is True

    @pytest.mark.parametrize("crawler", SEARCH_CRAWLERS)
    def test_crawlers_are_not_asked_and_get_no_cookie(self, crawler):
        decision = self.service.resolve(None, None, f"Mozilla/5.0 (compatible; {crawler})")
        assert decision == ConsentDecision(ask_consent=False, has_consent=False)


class TestResolveWithCookie:
    """Branch 2: a consent cookie arrived with the request."""

    def setup_method(self):
        self.service = ConsentService()

    def test_asked_upgrades_to_persistent_true(self, fixed_now):
        decision = self.service.resolve("asked", None, BROWSER_UA, now=fixed_now)

        assert decision.ask_consent is False
        assert decision.has_consent is True
        write = decision.cookie_write
        assert write.name == CONSENT_COOKIE_NAME
        assert write.value == "true"
        assert write.expires_at == datetime(2027, 10, 19, 8, 30, tzinfo=timezone.utc)
        assert not write.is_session_cookie

    def test_asked_default_clock_is_about_a_year_out(self):
        before = datetime.now(timezone.utc)
        decision = self.service.resolve("asked", None, None)
        delta = decision.cookie_write.expires_at - before
        assert 364 <= delta.days <= 366

    def test_true_keeps_consent_without_rewrite(self):
        decision = self.service.resolve("true", None, BROWSER_UA)
        assert decision == ConsentDecision(ask_consent=False, has_consent=True)

    @pytest.mark.parametrize("value", ["false", "xyz", "", "True", "asked "])
    def test_other_values_are_denial(self, value):
        decision = self.service.resolve(value, None, BROWSER_UA)
        assert decision == ConsentDecision(ask_consent=False, has_consent=False)

    def test_cookie_takes_precedence_over_dnt_and_crawler(self):
        assert self.service.resolve("true", "1", "Googlebot").has_consent is True
        assert self.service.resolve("false", "0", BROWSER_UA).has_consent is False


class TestRoundTrip:
    """Feeding each response cookie back in as the next request's cookie."""

    def test_first_visit_converges_on_true(self, fixed_now):
        service = ConsentService()
        cookie = None
        seen = []
        for _ in range(4):
            decision = service.resolve(cookie, None, BROWSER_UA, now=fixed_now)
            if decision.cookie_write is not None:
                cookie = decision.cookie_write.value
            seen.append(cookie)

        assert seen == ["asked", "true", "true", "true"]

    def test_denied_stays_denied(self):
        service = ConsentService()
        decision = service.resolve("false", None, BROWSER_UA)
        assert decision.cookie_write is None
        assert service.resolve("false", None, BROWSER_UA) == decision


class TestCompanionOperations:

    def setup_method(self):
        self.service = ConsentService()

    @pytest.mark.parametrize("grant,value", [(True, "true"), (False, "false")])
    def test_build_consent_cookie(self, grant, value, fixed_now):
        write = self.service.build_consent_cookie(grant, now=fixed_now)
        assert write.name == CONSENT_COOKIE_NAME
        assert write.value == value
        assert write.expires_at == datetime(2027, 10, 19, 8, 30, tzinfo=timezone.utc)

    def test_naive_clock_is_taken_as_utc(self):
        write = self.service.build_consent_cookie(True, now=datetime(2026, 10, 19, 8, 30))
        assert write.expires_at == datetime(2027, 10, 19, 8, 30, tzinfo=timezone.utc)
        assert write.expires_at.tzinfo is timezone.utc

    def test_offset_clock_is_converted_to_utc(self):
        cest = timezone(timedelta(hours=2))
        write = self.service.build_consent_cookie(False, now=datetime(2026, 10, 19, 1, 0, tzinfo=cest))
        assert write.expires_at == datetime(2027, 10, 18, 23, 0, tzinfo=timezone.utc)
        assert write.expires_at.tzinfo is timezone.utc

    def test_offset_clock_renders_gmt_expiry_header(self):
        cest = timezone(timedelta(hours=2))
        write = self.service.build_consent_cookie(True, now=datetime(2026, 10, 19, 1, 0, tzinfo=cest))

        response = Response()
        apply_cookie_write(response, write)

        header = response.headers["set-cookie"]
        assert header.startswith("CookieConsent=true;")
        assert "18 Oct 2027 23:00:00 GMT" in header

    def test_banner_hidden_cookie_is_session_scoped(self):
        write = self.service.build_banner_hidden_cookie()
        assert write.name == BANNER_HIDDEN_COOKIE_NAME
        assert write.value == "1"
        assert write.is_session_cookie

    def test_accessors_default_to_false(self):
        assert should_ask_consent(None) is False
        assert has_consent(None) is False

    def test_accessors_read_decision(self):
        decision = ConsentDecision(ask_consent=True, has_consent=False)
        assert should_ask_consent(decision) is True
        assert has_consent(decision) is False

    def test_one_year_after_leap_day(self):
        leap = datetime(2028, 2, 29, 23, 0, tzinfo=timezone.utc)
        assert one_year_after(leap) == datetime(2029, 2, 28, 23, 0, tzinfo=timezone.utc)
