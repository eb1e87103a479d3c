"""Tests for token file storage."""

import datetime as dt
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from google_tasks_cli.onepassword import ClientCredentials
from google_tasks_cli.token_store import (
    TOKEN_URI,
    credentials_from_token,
    ensure_token_directory,
    load_token,
    record_from_credentials,
    save_token,
    token_record,
)

CLIENT = ClientCredentials("client-id", "client-secret", ["http://localhost:3000"])


class TestTokenRecord:
    """Test shaping of provider token responses."""

    def test_joins_scope_list(self):
        record = token_record({"access_token": "a", "scope": ["s1", "s2"]})
        assert record["scope"] == "s1 s2"

    def test_expiry_from_expires_at(self):
        record = token_record({"access_token": "a", "expires_at": 1700000000.5})
        assert record["expiry_date"] == 1700000000500

    @patch("google_tasks_cli.token_store.time.time", return_value=1000.0)
    def test_expiry_from_expires_in(self, _mock_time):
        record = token_record({"access_token": "a", "expires_in": 3599})
        assert record["expiry_date"] == 4599000

    def test_keeps_existing_expiry_date(self):
        record = token_record({"access_token": "a", "expiry_date": 123, "expires_at": 999})
        assert record["expiry_date"] == 123

    def test_drops_unrelated_fields(self):
        record = token_record(
            {
                "access_token": "a",
                "refresh_token": "r",
                "token_type": "Bearer",
                "refresh_token_expires_in": 604799,
            }
        )
        assert set(record) == {"access_token", "refresh_token", "scope", "token_type", "expiry_date"}

    def test_keeps_id_token(self):
        assert token_record({"id_token": "jwt"})["id_token"] == "jwt"


class TestSaveAndLoad:
    """Test the token file round trip."""

    def test_save_creates_directory(self, temp_dir: Path):
        path = temp_dir / "nested" / "dir" / "token.json"
        save_token({"access_token": "a"}, path)
        assert path.exists()

    def test_save_overwrites_instead_of_merging(self, temp_dir: Path):
        """A new authorization replaces the file wholesale."""
        path = temp_dir / "token.json"
        save_token(
            {"access_token": "old", "refresh_token": "old-refresh", "id_token": "old-id"}, path
        )
        save_token({"access_token": "new", "token_type": "Bearer"}, path)

        stored = json.loads(path.read_text())
        assert stored == {"access_token": "new", "token_type": "Bearer"}

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions only")
    def test_save_restricts_permissions(self, temp_dir: Path):
        path = temp_dir / "token.json"
        save_token({"access_token": "a"}, path)
        assert (path.stat().st_mode & 0o777) == 0o600

    def test_load_missing_returns_none(self, temp_dir: Path):
        assert load_token(temp_dir / "missing.json") is None

    def test_load_invalid_json_returns_none(self, temp_dir: Path):
        path = temp_dir / "token.json"
        path.write_text("{not json")
        assert load_token(path) is None

    def test_load_non_object_returns_none(self, temp_dir: Path):
        path = temp_dir / "token.json"
        path.write_text("[1, 2]")
        assert load_token(path) is None

    def test_load_returns_saved_record(self, temp_dir: Path):
        path = temp_dir / "token.json"
        record = {"access_token": "a", "refresh_token": "r", "expiry_date": 5}
        save_token(record, path)
        assert load_token(path) == record

    def test_ensure_token_directory(self, temp_dir: Path):
        path = temp_dir / "a" / "b" / "token.json"
        ensure_token_directory(path)
        assert path.parent.is_dir()
        assert not path.exists()


class TestCredentials:
    """Test conversion between records and google-auth credentials."""

    def test_credentials_from_token(self):
        record = {
            "access_token": "access",
            "refresh_token": "refresh",
            "scope": "s1 s2",
            "expiry_date": 1700000000000,
        }
        creds = credentials_from_token(record, CLIENT, ["fallback"])

        assert creds.token == "access"
        assert creds.refresh_token == "refresh"
        assert creds.client_id == "client-id"
        assert creds.client_secret == "client-secret"
        assert creds.token_uri == TOKEN_URI
        assert list(creds.scopes) == ["s1", "s2"]
        assert creds.expiry == dt.datetime(2023, 11, 14, 22, 13, 20)

    def test_credentials_fall_back_to_configured_scopes(self):
        creds = credentials_from_token({"access_token": "a"}, CLIENT, ["fallback"])
        assert list(creds.scopes) == ["fallback"]
        assert creds.expiry is None

    def test_record_from_credentials(self):
        record = {
            "access_token": "access",
            "refresh_token": "refresh",
            "scope": "s1 s2",
            "expiry_date": 1700000000000,
        }
        creds = credentials_from_token(record, CLIENT, [])

        result = record_from_credentials(creds)
        assert result["access_token"] == "access"
        assert result["refresh_token"] == "refresh"
        assert result["scope"] == "s1 s2"
        assert result["token_type"] == "Bearer"
        assert result["expiry_date"] == 1700000000000
