"""Unit tests for settings validation."""

import unittest

from pydantic import ValidationError

from taskboard.core.config import DEFAULT_TOKEN_EXPIRE_MINUTES, Settings


def _settings(**overrides: object) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_ACCESS_SECRET": "access",
        "JWT_REFRESH_SECRET": "refresh",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = _settings()
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.JWT_ACCESS_EXPIRE_MINUTES, DEFAULT_TOKEN_EXPIRE_MINUTES)
        self.assertEqual(settings.JWT_REFRESH_EXPIRE_MINUTES, 30 * 24 * 60)

    def test_secrets_must_differ(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ACCESS_SECRET="same", JWT_REFRESH_SECRET="same")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ACCESS_SECRET="   ")

    def test_database_url_scheme(self) -> None:
        self.assertEqual(
            _settings(DATABASE_URL=" postgresql://u:p@db/tasks ").DATABASE_URL,
            "postgresql://u:p@db/tasks",
        )
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@db/tasks")

    def test_api_port_bounds(self) -> None:
        self.assertEqual(_settings(API_PORT=8080).API_PORT, 8080)
        for port in (0, 65536):
            with self.assertRaises(ValidationError):
                _settings(API_PORT=port)

    def test_bcrypt_rounds_bounds(self) -> None:
        self.assertEqual(_settings(BCRYPT_ROUNDS=4).BCRYPT_ROUNDS, 4)
        for rounds in (3, 32):
            with self.assertRaises(ValidationError):
                _settings(BCRYPT_ROUNDS=rounds)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_api_prefix_trailing_slash(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")


if __name__ == "__main__":
    unittest.main()
