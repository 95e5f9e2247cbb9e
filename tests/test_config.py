import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from bakery import cli
from bakery.config import Settings


class SettingsTest(unittest.TestCase):
    def test_database_url_and_secret_are_required(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError) as ctx:
                Settings(_env_file=None)
        missing = {error["loc"][0] for error in ctx.exception.errors()}
        self.assertEqual(missing, {"DATABASE_URL", "JWT_SECRET"})

    def test_blank_secret_is_rejected(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, DATABASE_URL="sqlite://", JWT_SECRET="   ")

    def test_reads_environment(self):
        env = {
            "DATABASE_URL": "sqlite:///./bakery.db",
            "JWT_SECRET": "from-env",
            "JWT_EXPIRE_MINUTES": "30",
            "CORS_ORIGINS": "http://localhost:3000, https://bakery.example.com",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.DATABASE_URL, "sqlite:///./bakery.db")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 30)
        self.assertEqual(
            settings.cors_origins(),
            ["http://localhost:3000", "https://bakery.example.com"],
        )


class CliConfigurationTest(unittest.TestCase):
    def test_missing_configuration_exits_non_zero(self):
        def broken_settings():
            return Settings(_env_file=None)

        with patch.dict(os.environ, {}, clear=True), patch.object(cli, "get_settings", broken_settings):
            with self.assertRaises(SystemExit) as ctx:
                cli.load_settings()
        self.assertEqual(ctx.exception.code, 1)

    def test_parse_args(self):
        args = cli.parse_args(["serve", "--port", "9000"])
        self.assertEqual((args.command, args.host, args.port), ("serve", "127.0.0.1", 9000))
        args = cli.parse_args(["create-admin", "--name", "Ana", "--email", "a@x.com", "--password", "secret1"])
        self.assertEqual(args.command, "create-admin")


if __name__ == "__main__":
    unittest.main()
