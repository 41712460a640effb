"""
Unit tests for session tokens and the /jwt and /logout endpoints
"""
import pytest
from datetime import timedelta

from fastapi import HTTPException
from starlette.requests import Request

from loanlink.core.exceptions import ConfigurationError
from loanlink.core.security import create_access_token, decode_token, extract_token


def _request(headers: dict) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestTokens:
    """Token round-trip and failure modes"""

    @pytest.mark.unit
    def test_round_trip(self):
        token = create_access_token({"email": "ana@example.com", "name": "Ana"})

        claims = decode_token(token)

        assert claims["email"] == "ana@example.com"
        assert claims["name"] == "Ana"
        assert "exp" in claims

    @pytest.mark.unit
    def test_expired_token(self):
        token = create_access_token(
            {"email": "ana@example.com"}, expires_delta=timedelta(seconds=-10)
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    @pytest.mark.unit
    def test_wrong_secret(self):
        token = create_access_token({"email": "ana@example.com"}, secret="other-secret")

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    @pytest.mark.unit
    def test_token_without_email(self):
        token = create_access_token({"name": "nobody"})

        with pytest.raises(HTTPException):
            decode_token(token)

    @pytest.mark.unit
    def test_missing_secret(self, monkeypatch):
        from loanlink.core.config import settings

        monkeypatch.setattr(settings, "ACCESS_TOKEN_SECRET", "")

        with pytest.raises(ConfigurationError):
            create_access_token({"email": "ana@example.com"})


class TestTokenExtraction:
    """Cookie and bearer header lookup"""

    @pytest.mark.unit
    def test_bearer_header(self):
        assert extract_token(_request({"Authorization": "Bearer abc.def"})) == "abc.def"

    @pytest.mark.unit
    def test_cookie(self):
        assert extract_token(_request({"Cookie": "token=from-cookie"})) == "from-cookie"

    @pytest.mark.unit
    def test_cookie_takes_precedence(self):
        request = _request({
            "Cookie": "token=from-cookie",
            "Authorization": "Bearer from-header",
        })
        assert extract_token(request) == "from-cookie"

    @pytest.mark.unit
    def test_other_schemes_ignored(self):
        assert extract_token(_request({"Authorization": "Basic dXNlcjpwYXNz"})) is None
        assert extract_token(_request({})) is None


class TestSessionEndpoints:
    """Tests for /jwt and /logout"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_issue_token_sets_cookie(self, client):
        response = await client.post("/jwt", json={"email": "ana@example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert decode_token(data["token"])["email"] == "ana@example.com"

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "httponly" in set_cookie.lower()
        assert "samesite=strict" in set_cookie.lower()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_issue_token_requires_email(self, client):
        response = await client.post("/jwt", json={"name": "no email"})

        assert response.status_code == 422

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cookie_session_authenticates(self, client, borrower):
        issued = await client.post("/jwt", json={"email": borrower["email"]})
        token = issued.json()["token"]

        response = await client.get("/applications", headers={"Cookie": f"token={token}"})

        assert response.status_code == 200

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_invalid_cookie_wins_over_valid_header(self, client, borrower, borrower_headers):
        headers = dict(borrower_headers, Cookie="token=garbage")

        response = await client.get("/applications", headers=headers)

        assert response.status_code == 401

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client):
        response = await client.post("/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("token=")
        assert "max-age=0" in set_cookie
