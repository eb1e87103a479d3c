"""
OAuth client credentials sourced from the 1Password CLI.

The item named by OP_ITEM_NAME in vault OP_VAULT must carry
``client_id`` and ``client_secret`` fields.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field

from google_tasks_cli.config import OnePasswordSettings

logger = logging.getLogger(__name__)


@dataclass
class ClientCredentials:
    """OAuth client registration pulled from the secrets store."""

    client_id: str
    client_secret: str
    redirect_uris: list[str] = field(default_factory=list)


def _run(cmd: list[str], timeout: int = 30) -> str:
    """Run a command and return its stripped stdout; raise on non-zero exit."""
    result = subprocess.run(
        cmd, capture_output=True, text=True, timeout=timeout, check=True
    )
    return result.stdout.strip()


def check_cli(settings: OnePasswordSettings) -> bool:
    """Return True if the op CLI is installed and the user is signed in."""
    try:
        _run([settings.cli_path, "--version"])
        # Listing items fails when there is no active session.
        _run([settings.cli_path, "item", "list", "--categories", "API Credential"])
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"1Password CLI unavailable: {e}")
        return False
    return True


def _read_field(settings: OnePasswordSettings, field_name: str, reveal: bool = False) -> str:
    cmd = [
        settings.cli_path,
        "item",
        "get",
        settings.item_name,
        "--vault",
        settings.vault,
        "--field",
        field_name,
    ]
    if reveal:
        cmd.append("--reveal")
    return _run(cmd)


def get_credentials(
    settings: OnePasswordSettings, redirect_uri: str
) -> ClientCredentials | None:
    """
    Fetch client_id and client_secret from 1Password.

    Returns None (after logging remediation steps) if either field cannot be read.
    """
    logger.info(f'🔐 Retrieving credentials from 1Password item: "{settings.item_name}"')
    try:
        client_id = _read_field(settings, "client_id")
        client_secret = _read_field(settings, "client_secret", reveal=True)
    except (OSError, subprocess.SubprocessError) as e:
        stderr = getattr(e, "stderr", None)
        detail = stderr.strip() if stderr else str(e)
        logger.error(f"❌ Error retrieving credentials from 1Password: {detail}")
        logger.error(
            "Make sure you have:\n"
            f'   1. A 1Password item named "{settings.item_name}" in vault "{settings.vault}"\n'
            "   2. Fields: client_id, client_secret\n"
            "   3. 1Password CLI installed and signed in (op signin)\n"
            "You can customize the vault and item name with environment variables:\n"
            '   export OP_VAULT="YourVaultName"\n'
            '   export OP_ITEM_NAME="YourItemName"'
        )
        return None

    if not client_id or not client_secret:
        logger.error(
            f'❌ 1Password item "{settings.item_name}" is missing client_id or client_secret'
        )
        return None

    return ClientCredentials(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uris=[redirect_uri],
    )
