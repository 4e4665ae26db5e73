import pytest

from contact_keeper_api.app.core.config import settings
from contact_keeper_api.app.core.errors import Unauthenticated
from contact_keeper_api.app.core.security import (
    AuthContext,
    authenticate_token,
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestTokens:
    def test_round_trip(self):
        payload = decode_access_token(create_access_token({"sub": "7"}))
        assert payload["sub"] == "7"
        assert "exp" in payload

    def test_expired_token(self):
        assert decode_access_token(create_access_token({"sub": "7"}, expires_delta=-10)) is None

    def test_tampered_payload(self):
        header, _, signature = create_user_token(7).split(".")
        forged_payload = create_user_token(8).split(".")[1]
        assert decode_access_token(f"{header}.{forged_payload}.{signature}") is None

    def test_other_secret(self, monkeypatch):
        token = create_user_token(7)
        monkeypatch.setattr(settings, "secret_key", "rotated")
        assert decode_access_token(token) is None

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "a.b.c.d", "!!!.???.###"])
    def test_malformed(self, token):
        assert decode_access_token(token) is None


class TestAuthenticateToken:
    def test_valid(self):
        assert authenticate_token(create_user_token(42)) == AuthContext(user_id=42)

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing(self, token):
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_token(token)
        assert exc_info.value.message == "no token, authorization denied"

    def test_invalid(self):
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_token("a.b.c")
        assert exc_info.value.message == "token is not valid"

    @pytest.mark.parametrize("claims", [{}, {"sub": "alice"}, {"sub": None}])
    def test_token_without_usable_subject(self, claims):
        with pytest.raises(Unauthenticated):
            authenticate_token(create_access_token(claims))


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        assert "secret123" not in hashed
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    @pytest.mark.parametrize("stored", ["", "nodollar", "zz$zz", None])
    def test_garbage_hash(self, stored):
        assert verify_password("secret123", stored) is False
