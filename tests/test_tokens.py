"""Unit tests for taskboard.services.tokens: issuance, verification and the token store."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt
from sqlalchemy.exc import IntegrityError, OperationalError

from taskboard.core.config import get_settings
from taskboard.core.errors import BadRequestError, InternalError
from taskboard.models import Token
from taskboard.services.tokens import (
    find_token,
    generate_tokens,
    save_token,
    validate_access_token,
    validate_refresh_token,
)

PAYLOAD = {"id": 7, "email": "alice@mail.com", "role": "USER"}


class TestGenerateTokens(unittest.TestCase):
    def test_both_tokens_carry_the_same_claims(self) -> None:
        pair = generate_tokens(PAYLOAD)
        access = validate_access_token(pair.access_token)
        refresh = validate_refresh_token(pair.refresh_token)
        for claims in (access, refresh):
            self.assertIsNotNone(claims)
            self.assertEqual(claims["id"], 7)
            self.assertEqual(claims["email"], "alice@mail.com")
            self.assertEqual(claims["role"], "USER")

    def test_default_expiry_is_thirty_days(self) -> None:
        pair = generate_tokens(PAYLOAD)
        claims = validate_access_token(pair.access_token)
        self.assertEqual(claims["exp"] - claims["iat"], 30 * 24 * 60 * 60)

    def test_each_pair_is_unique(self) -> None:
        first = generate_tokens(PAYLOAD)
        second = generate_tokens(PAYLOAD)
        self.assertNotEqual(first.refresh_token, second.refresh_token)
        self.assertNotEqual(first.access_token, second.access_token)

    def test_empty_payload_is_bad_request(self) -> None:
        for payload in (None, {}):
            with self.assertRaises(BadRequestError) as ctx:
                generate_tokens(payload)
            self.assertEqual(ctx.exception.status_code, 400)

    def test_respects_injected_settings(self) -> None:
        settings = get_settings().model_copy(update={"JWT_ACCESS_EXPIRE_MINUTES": 5})
        pair = generate_tokens(PAYLOAD, settings)
        claims = validate_access_token(pair.access_token, settings)
        self.assertEqual(claims["exp"] - claims["iat"], 5 * 60)


class TestValidateTokens(unittest.TestCase):
    """Validation returns None for any failure instead of raising."""

    def test_secrets_are_not_interchangeable(self) -> None:
        pair = generate_tokens(PAYLOAD)
        self.assertIsNone(validate_access_token(pair.refresh_token))
        self.assertIsNone(validate_refresh_token(pair.access_token))

    def test_garbage_returns_none(self) -> None:
        self.assertIsNone(validate_access_token("not-a-jwt"))
        self.assertIsNone(validate_refresh_token(""))

    def test_expired_token_returns_none(self) -> None:
        settings = get_settings()
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {**PAYLOAD, "exp": past},
            settings.JWT_ACCESS_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertIsNone(validate_access_token(token))

    def test_wrong_signature_returns_none(self) -> None:
        token = jwt.encode(PAYLOAD, "someone-elses-secret", algorithm="HS256")
        self.assertIsNone(validate_access_token(token))


class TestSaveToken(unittest.TestCase):
    def test_overwrites_existing_row(self) -> None:
        existing = Token(user_id=1, refresh_token="old")
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = existing
        row = save_token(db, 1, "new")
        self.assertIs(row, existing)
        self.assertEqual(existing.refresh_token, "new")
        db.add.assert_not_called()
        db.commit.assert_called_once()

    def test_creates_row_when_missing(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        row = save_token(db, 3, "fresh")
        self.assertEqual(row.user_id, 3)
        self.assertEqual(row.refresh_token, "fresh")
        db.add.assert_called_once_with(row)

    def test_empty_token_is_bad_request(self) -> None:
        db = MagicMock()
        with self.assertRaises(BadRequestError):
            save_token(db, 1, "")
        db.query.assert_not_called()

    def test_concurrent_insert_falls_back_to_update(self) -> None:
        winner = Token(user_id=3, refresh_token="other")
        db = MagicMock()
        db.query.return_value.filter.return_value.first.side_effect = [None, winner]
        db.commit.side_effect = [
            IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: tokens.user_id")),
            None,
        ]
        row = save_token(db, 3, "fresh")
        self.assertIs(row, winner)
        self.assertEqual(winner.refresh_token, "fresh")
        db.rollback.assert_called_once()
        self.assertEqual(db.commit.call_count, 2)

    def test_unrecoverable_conflict_is_internal(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        db.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        with self.assertRaises(InternalError) as ctx:
            save_token(db, 3, "fresh")
        self.assertEqual(ctx.exception.error_code, "TOKEN_STORE_ERROR")
        db.rollback.assert_called_once()


class TestFindToken(unittest.TestCase):
    def test_returns_matching_rows(self) -> None:
        db = MagicMock()
        rows = [Token(user_id=1, refresh_token="abc")]
        db.query.return_value.filter.return_value.all.return_value = rows
        self.assertEqual(find_token(db, "abc"), rows)

    def test_storage_error_is_internal(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.all.side_effect = OperationalError(
            "SELECT", {}, Exception("connection lost")
        )
        with self.assertRaises(InternalError) as ctx:
            find_token(db, "abc")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.error_code, "TOKEN_STORE_ERROR")


if __name__ == "__main__":
    unittest.main()
