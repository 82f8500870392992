"""Unit tests for app.core.security: bcrypt hashing and JWT issuance/verification."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_salted_and_verifies(self) -> None:
        first = hash_password("password123", rounds=4)
        second = hash_password("password123", rounds=4)
        self.assertNotEqual(first, second)
        self.assertNotIn("password123", first)
        self.assertTrue(verify_password("password123", first))
        self.assertTrue(verify_password("password123", second))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("password123", rounds=4)
        self.assertFalse(verify_password("password124", hashed))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("password123", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """Tokens carry only the user id and expire 24 hours after issuance."""

    def setUp(self) -> None:
        self.issued = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        self.token = create_access_token(42, now=self.issued)

    def test_payload_carries_only_user_id_claim(self) -> None:
        payload = decode_access_token(self.token, now=self.issued)
        self.assertEqual(payload["sub"], "42")
        self.assertEqual(set(payload), {"sub", "iat", "exp"})

    def test_expires_after_24_hours(self) -> None:
        payload = decode_access_token(self.token, now=self.issued)
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_valid_just_before_expiry(self) -> None:
        just_before = self.issued + timedelta(hours=23, minutes=59)
        self.assertEqual(decode_access_token(self.token, now=just_before)["sub"], "42")

    def test_rejected_after_expiry(self) -> None:
        after = self.issued + timedelta(hours=24, seconds=1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(self.token, now=after)

    def test_rejected_with_system_clock_when_long_expired(self) -> None:
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(self.token)

    def test_fresh_token_accepted_with_system_clock(self) -> None:
        token = create_access_token("7")
        self.assertEqual(decode_access_token(token)["sub"], "7")

    def test_rejected_with_wrong_secret(self) -> None:
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(self.token, now=self.issued, secret="another-secret")

    def test_rejected_when_tampered(self) -> None:
        header, payload, signature = self.token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(tampered, now=self.issued)

    def test_rejected_without_sub(self) -> None:
        token = jwt.encode(
            {"exp": self.issued + timedelta(hours=1)}, "testsecret", algorithm="HS256"
        )
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token, now=self.issued, secret="testsecret")
