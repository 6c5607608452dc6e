"""Unit tests for staff session token generation and validation

Tests cover:
- Token creation with valid claims
- Token decoding and validation
- Token expiration handling
- Invalid token handling
"""

import time
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from auth.jwt import STAFF_ROLE, create_access_token, decode_token

SECRET = "test-secret-key-256-bits-minimum-length-required-for-security"


class TestCreateAccessToken:
    """Test session token creation"""

    def test_token_contains_expected_claims(self, monkeypatch):
        """Test token payload contains all expected claims"""
        monkeypatch.setenv('JWT_SECRET', SECRET)
        user_id = uuid4()

        token = create_access_token(user_id=user_id, email="frontdesk@grandhotel.com")
        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload['sub'] == str(user_id)
        assert payload['email'] == "frontdesk@grandhotel.com"
        assert payload['role'] == STAFF_ROLE
        assert len(payload['jti']) == 32
        assert 'iat' in payload
        assert 'exp' in payload

    def test_each_token_has_unique_jti(self, monkeypatch):
        """Revoking one session must not revoke another"""
        monkeypatch.setenv('JWT_SECRET', SECRET)
        user_id = uuid4()

        first = jwt.decode(create_access_token(user_id, "a@grandhotel.com"), options={"verify_signature": False})
        second = jwt.decode(create_access_token(user_id, "a@grandhotel.com"), options={"verify_signature": False})

        assert first['jti'] != second['jti']

    def test_expiry_uses_configured_minutes(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        monkeypatch.setenv('JWT_EXPIRY_MINUTES', '60')

        payload = jwt.decode(create_access_token(uuid4(), "a@grandhotel.com"), options={"verify_signature": False})

        assert payload['exp'] - payload['iat'] == 3600

    def test_missing_secret_raises(self, monkeypatch):
        monkeypatch.delenv('JWT_SECRET', raising=False)
        with pytest.raises(ValueError, match="JWT_SECRET"):
            create_access_token(uuid4(), "a@grandhotel.com")


class TestDecodeToken:
    """Test session token validation"""

    def test_decode_valid_token(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        user_id = uuid4()

        payload = decode_token(create_access_token(user_id, "a@grandhotel.com"))

        assert payload['sub'] == str(user_id)

    def test_expired_token_rejected(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        now = int(time.time())
        token = jwt.encode(
            {'sub': str(uuid4()), 'role': STAFF_ROLE, 'jti': 'x', 'iat': now - 7200, 'exp': now - 3600},
            SECRET,
            algorithm='HS256',
        )

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token)

    def test_wrong_secret_rejected(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        token = create_access_token(uuid4(), "a@grandhotel.com")
        monkeypatch.setenv('JWT_SECRET', "another-secret-key-256-bits-minimum-length-required-for-tests")

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token)

    def test_token_without_staff_role_rejected(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                'sub': str(uuid4()),
                'role': 'GUEST',
                'jti': 'abc',
                'iat': int(now.timestamp()),
                'exp': int((now + timedelta(hours=1)).timestamp()),
            },
            SECRET,
            algorithm='HS256',
        )

        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token)

    def test_token_missing_jti_rejected(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        now = int(time.time())
        token = jwt.encode(
            {'sub': str(uuid4()), 'role': STAFF_ROLE, 'iat': now, 'exp': now + 3600},
            SECRET,
            algorithm='HS256',
        )

        with pytest.raises(jwt.MissingRequiredClaimError):
            decode_token(token)

    def test_garbage_rejected(self, monkeypatch):
        monkeypatch.setenv('JWT_SECRET', SECRET)
        with pytest.raises(jwt.InvalidTokenError):
            decode_token("not.a.token")
