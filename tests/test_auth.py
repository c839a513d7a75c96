import time

import jwt
import pytest

from analytics_demo.auth import AuthService, JWTClaims
from analytics_demo.config import Settings


def make_settings(**overrides):
    return Settings(**overrides)


def test_default_claims_are_demo_super_admin():
    svc = AuthService(settings=make_settings(jwt_secret="s", demo_user_id="u-1"))
    claims = svc.current_claims()
    assert claims["role"] == "super_admin"
    assert claims["sub"] == "u-1"
    assert claims["exp"] > time.time()


def test_issue_and_decode_round_trip():
    svc = AuthService(settings=make_settings(jwt_secret="secret"))
    decoded = svc.decode_token(svc.issue_token())
    assert decoded.email == svc.settings.demo_user_email
    assert decoded.role == "super_admin"


def test_role_mapping():
    s = make_settings(jwt_secret="secret")
    svc = AuthService(settings=s)
    payload = {"sub": "x", "email": "x@y", "role": "Admin", "exp": int(time.time()) + 60}
    tok = jwt.encode(payload, s.jwt_secret, algorithm="HS256")
    assert svc.decode_token(tok).role == "admin"
    assert JWTClaims(sub="x", email="x@y", role="owner", exp=1).role == "authenticated"


def test_decode_invalid_token_raises():
    svc = AuthService(settings=make_settings(jwt_secret="secret"))
    with pytest.raises(jwt.InvalidTokenError):
        svc.decode_token("not-a-token")


def test_decode_expired_token_raises():
    s = make_settings(jwt_secret="secret")
    svc = AuthService(settings=s)
    tok = svc.issue_token({"sub": "x", "email": "x@y", "exp": int(time.time()) - 10})
    with pytest.raises(jwt.ExpiredSignatureError):
        svc.decode_token(tok)


def test_session_carries_user_and_token():
    svc = AuthService(settings=make_settings(jwt_secret="secret", demo_user_name="Demo Person"))
    session = svc.session()
    assert session.user.user_metadata.full_name == "Demo Person"
    assert svc.decode_token(session.access_token).exp == session.expires_at
