"""Unit tests for JWTService."""

from datetime import timedelta

import jwt
from jwt.utils import base64url_encode
import pytest

from atlas.config import AuthSettings
from atlas.domain.service import JWTService
from atlas.util.jwt import TokenIssuanceError, TokenParsingError
from tests.conftest import T0, FakeClock, make_account


class TestIssue:
    """Tests for JWTService.issue()."""

    def test_round_trip_preserves_identity_claims(self, auth_settings):
        """Claims read back equal the account fields the token was issued for."""
        clock = FakeClock()
        service = JWTService(auth_settings, clock=clock)
        account = make_account(
            account_id=42, avatar_url="https://example.com/ann.png"
        )

        token = service.issue(account)
        claims = service.claims(token)

        assert claims.subject_id == 42
        assert claims.email == "ann@example.com"
        assert claims.first_name == "Ann"
        assert claims.last_name == "Lee"
        assert claims.avatar_url == "https://example.com/ann.png"
        assert claims.issued_at == T0
        assert claims.expires_at == T0 + timedelta(hours=1)

    def test_token_is_compact_hs512_jwt(self, auth_settings):
        """Token should be a three-part compact JWT signed with HS512."""
        service = JWTService(auth_settings, clock=FakeClock())

        token = service.issue(make_account())

        assert token.count(".") == 2
        assert jwt.get_unverified_header(token)["alg"] == "HS512"

    def test_payload_carries_expected_claim_names(self, auth_settings):
        """Payload should use sub/userId/email/firstName/lastName claim names."""
        service = JWTService(auth_settings, clock=FakeClock())

        token = service.issue(make_account(account_id=7))
        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload["sub"] == "7"
        assert payload["userId"] == 7
        assert payload["email"] == "ann@example.com"
        assert payload["firstName"] == "Ann"
        assert payload["lastName"] == "Lee"
        assert payload["exp"] - payload["iat"] == 3600

    def test_profile_picture_omitted_when_absent(self, auth_settings):
        """Avatar claim should only be present when the account has one."""
        service = JWTService(auth_settings, clock=FakeClock())

        token = service.issue(make_account(avatar_url=None))
        payload = jwt.decode(token, options={"verify_signature": False})

        assert "profilePicture" not in payload
        assert service.claims(token).avatar_url is None

    def test_unsaved_account_is_rejected(self, auth_settings):
        """Issuing for an account without an ID should fail."""
        service = JWTService(auth_settings, clock=FakeClock())

        with pytest.raises(TokenIssuanceError):
            service.issue(make_account(account_id=None))

    def test_short_signing_key_is_rejected(self):
        """Keys shorter than 32 bytes should be refused at issuance."""
        service = JWTService(AuthSettings(jwt_secret="too-short"), clock=FakeClock())

        with pytest.raises(TokenIssuanceError):
            service.issue(make_account())

    def test_empty_signing_key_is_rejected(self):
        """An empty key should be refused at issuance."""
        service = JWTService(AuthSettings(jwt_secret=""), clock=FakeClock())

        with pytest.raises(TokenIssuanceError):
            service.issue(make_account())

    def test_unsupported_algorithm_is_wrapped(self, auth_settings):
        """Signing failures should surface as TokenIssuanceError."""
        settings = auth_settings.model_copy(update={"jwt_algorithm": "NOPE"})
        service = JWTService(settings, clock=FakeClock())

        with pytest.raises(TokenIssuanceError):
            service.issue(make_account())


class TestValidate:
    """Tests for JWTService.validate()."""

    @pytest.mark.parametrize(
        "token",
        [
            None,
            "",
            "   ",
            "garbage",
            "a.b.c",
            "eyJhbGciOiJIUzUxMiJ9..",
            12345,
            b"\xff\xfe.\x80.\x81",
            "\ud800.a.b",
        ],
    )
    def test_invalid_inputs_are_false_and_never_raise(self, auth_settings, token):
        """Missing, blank, malformed, non-UTF-8 and wrongly typed tokens are invalid."""
        service = JWTService(auth_settings, clock=FakeClock())

        assert service.validate(token) is False

    def test_fresh_token_is_valid(self, auth_settings):
        """A just-issued token should validate."""
        service = JWTService(auth_settings, clock=FakeClock())

        assert service.validate(service.issue(make_account())) is True

    def test_token_signed_with_other_key_is_invalid(self, auth_settings):
        """Tokens signed with a different key should be rejected."""
        other_key = "another-signing-key-that-is-long-enough-for-hs512-signatures-98765"
        other = JWTService(
            AuthSettings(jwt_secret=other_key),
            clock=FakeClock(),
        )
        service = JWTService(auth_settings, clock=FakeClock())

        assert service.validate(other.issue(make_account())) is False

    def test_tampered_payload_is_invalid(self, auth_settings):
        """Changing the payload should break the signature."""
        service = JWTService(auth_settings, clock=FakeClock())
        header, _, signature = service.issue(make_account(account_id=1)).split(".")
        forged_payload = (
            base64url_encode(b'{"sub":"2","userId":2}').decode("ascii")
        )

        assert service.validate(f"{header}.{forged_payload}.{signature}") is False

    def test_token_missing_required_claim_is_invalid(self, auth_settings):
        """A correctly signed token without identity claims is invalid."""
        token = jwt.encode(
            {"sub": "1", "iat": int(T0.timestamp()), "exp": int(T0.timestamp()) + 60},
            auth_settings.jwt_secret,
            algorithm="HS512",
        )
        service = JWTService(auth_settings, clock=FakeClock())

        assert service.validate(token) is False


class TestExpiry:
    """Expiry behaviour with a simulated clock."""

    def test_expiry_monotonicity(self, auth_settings):
        """Valid before expiry, invalid after it, and it never becomes valid again."""
        clock = FakeClock()
        service = JWTService(auth_settings, clock=clock)
        token = service.issue(make_account())

        clock.advance(minutes=59, seconds=59)
        assert service.validate(token) is True
        assert service.is_expired(token) is False

        clock.advance(seconds=2)
        assert service.validate(token) is False
        assert service.is_expired(token) is True

        clock.advance(days=365)
        assert service.validate(token) is False
        assert service.is_expired(token) is True

    def test_token_is_valid_at_exact_expiry_instant(self, auth_settings):
        """Comparison is strict: expiry equal to now is not yet expired."""
        clock = FakeClock()
        service = JWTService(auth_settings, clock=clock)
        token = service.issue(make_account())

        clock.advance(hours=1)

        assert service.is_expired(token) is False
        assert service.validate(token) is True

    def test_unparseable_token_counts_as_expired(self, auth_settings):
        """is_expired fails closed."""
        service = JWTService(auth_settings, clock=FakeClock())

        assert service.is_expired("not-a-token") is True


class TestClaims:
    """Tests for JWTService.claims()."""

    def test_malformed_token_raises_parsing_error_with_cause(self, auth_settings):
        """Parsing failures should be wrapped and keep their root cause."""
        service = JWTService(auth_settings, clock=FakeClock())

        with pytest.raises(TokenParsingError) as exc_info:
            service.claims("garbage")

        assert exc_info.value.cause is not None
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_unencodable_token_raises_parsing_error(self, auth_settings):
        """A lone surrogate cannot be encoded and is reported as a parse failure."""
        service = JWTService(auth_settings, clock=FakeClock())

        with pytest.raises(TokenParsingError) as exc_info:
            service.claims("\ud800.a.b")

        assert isinstance(exc_info.value.cause, UnicodeEncodeError)

    def test_expired_token_raises_parsing_error(self, auth_settings):
        """Expired tokens do not yield claims."""
        clock = FakeClock()
        service = JWTService(auth_settings, clock=clock)
        token = service.issue(make_account())

        clock.advance(hours=2)

        with pytest.raises(TokenParsingError):
            service.claims(token)
