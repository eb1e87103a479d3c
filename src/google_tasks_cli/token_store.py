"""Token storage helpers."""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import time
from pathlib import Path
from typing import Any

from google.oauth2.credentials import Credentials

from google_tasks_cli.onepassword import ClientCredentials

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
TOKEN_FIELDS = ("access_token", "refresh_token", "scope", "token_type", "expiry_date", "id_token")


def ensure_token_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def token_record(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Shape a token response from the provider into the stored record.

    ``scope`` is stored space-separated as the provider sends it, and expiry is
    kept as epoch milliseconds in ``expiry_date``.
    """
    record: dict[str, Any] = {
        "access_token": raw.get("access_token"),
        "refresh_token": raw.get("refresh_token"),
        "scope": raw.get("scope"),
        "token_type": raw.get("token_type"),
        "expiry_date": raw.get("expiry_date"),
    }
    if isinstance(record["scope"], (list, tuple)):
        record["scope"] = " ".join(record["scope"])
    if record["expiry_date"] is None:
        if raw.get("expires_at") is not None:
            record["expiry_date"] = int(float(raw["expires_at"]) * 1000)
        elif raw.get("expires_in") is not None:
            record["expiry_date"] = int((time.time() + float(raw["expires_in"])) * 1000)
    if raw.get("id_token"):
        record["id_token"] = raw["id_token"]
    return record


def save_token(record: dict[str, Any], path: Path) -> None:
    """Write the token record to disk, replacing whatever was there."""
    ensure_token_directory(path)
    data = {k: record[k] for k in TOKEN_FIELDS if k in record}
    path.write_text(json.dumps(data), encoding="utf-8")
    try:
        os.chmod(path, 0o600)
    except OSError as e:
        logger.debug(f"Could not restrict token file permissions: {e}")
    logger.info(f"✅ Token stored successfully to {path}")


def load_token(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable token file {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def credentials_from_token(
    record: dict[str, Any], client: ClientCredentials, scopes: list[str]
) -> Credentials:
    """Rebuild google-auth credentials from a stored token record."""
    expiry = None
    if record.get("expiry_date"):
        # google-auth compares against naive UTC datetimes
        expiry = dt.datetime.fromtimestamp(
            int(record["expiry_date"]) / 1000, tz=dt.timezone.utc
        ).replace(tzinfo=None)
    scope = record.get("scope")
    return Credentials(
        token=record.get("access_token"),
        refresh_token=record.get("refresh_token"),
        id_token=record.get("id_token"),
        token_uri=TOKEN_URI,
        client_id=client.client_id,
        client_secret=client.client_secret,
        scopes=scope.split() if scope else scopes,
        expiry=expiry,
    )


def record_from_credentials(creds: Credentials) -> dict[str, Any]:
    """Token record for credentials refreshed through google-auth."""
    expiry_date = None
    if creds.expiry is not None:
        expiry_date = int(creds.expiry.replace(tzinfo=dt.timezone.utc).timestamp() * 1000)
    return token_record(
        {
            "access_token": creds.token,
            "refresh_token": creds.refresh_token,
            "scope": list(creds.scopes or []),
            "token_type": "Bearer",
            "expiry_date": expiry_date,
            "id_token": creds.id_token,
        }
    )
