"""
OAuth2 authorization for Google Tasks and Google Photos.

Client credentials come from 1Password; the authorization code is caught by a
one-shot local listener on the fixed redirect port and exchanged for tokens,
which are then written to the token file.
"""

from __future__ import annotations

import errno
import logging

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from google_tasks_cli.config import Settings
from google_tasks_cli.onepassword import ClientCredentials, check_cli, get_credentials
from google_tasks_cli.token_store import (
    TOKEN_URI,
    credentials_from_token,
    ensure_token_directory,
    load_token,
    record_from_credentials,
    save_token,
    token_record,
)

logger = logging.getLogger(__name__)

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

AUTHORIZATION_PROMPT = (
    "🌐 Opening authorization URL in your browser...\n"
    "📋 If it does not open, visit this URL manually:\n{url}\n\n"
    "⏳ Waiting for authorization..."
)
SUCCESS_HTML = (
    '<html><body style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">'
    '<h1 style="color: #27ae60;">✅ Authorization Successful!</h1>'
    "<p>You can close this window and return to your terminal.</p>"
    "<script>setTimeout(() => window.close(), 3000);</script>"
    "</body></html>"
)


def _client_config(client: ClientCredentials) -> dict:
    return {
        "installed": {
            "client_id": client.client_id,
            "client_secret": client.client_secret,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
            "redirect_uris": client.redirect_uris,
        }
    }


def get_new_token(client: ClientCredentials, settings: Settings) -> Credentials:
    """
    Run the authorization-code grant and store the resulting token.

    The local listener serves exactly one redirect and is shut down before
    this returns.

    Raises:
        OSError: If the redirect port cannot be bound
        Exception: Any provider error raised while handling the callback
    """
    oauth = settings.oauth
    flow = InstalledAppFlow.from_client_config(_client_config(client), oauth.scopes)

    logger.info("🌐 Starting OAuth flow...")
    logger.info(f"🔧 Starting local callback server on {oauth.redirect_uri}")
    try:
        creds = flow.run_local_server(
            host=oauth.redirect_host,
            port=oauth.redirect_port,
            open_browser=oauth.open_browser,
            authorization_prompt_message=AUTHORIZATION_PROMPT,
            success_message=SUCCESS_HTML,
            redirect_uri_trailing_slash=False,
            access_type="offline",
        )
    except OSError as e:
        if e.errno == errno.EADDRINUSE:
            logger.error(
                f"❌ Port {oauth.redirect_port} is already in use. "
                "Please close other applications using this port."
            )
        else:
            logger.error(f"❌ Callback server error: {e}")
        raise
    except Exception as e:
        logger.error(f"❌ OAuth flow failed: {e}")
        raise

    save_token(token_record(dict(flow.oauth2session.token)), settings.token_path)
    return creds


def _reuse_stored_token(client: ClientCredentials, settings: Settings) -> Credentials | None:
    record = load_token(settings.token_path)
    if not record:
        return None
    creds = credentials_from_token(record, client, settings.oauth.scopes)
    if creds.valid:
        logger.info("✅ Using existing authentication token")
        return creds
    if creds.expired and creds.refresh_token:
        logger.info("🔄 Refreshing expired authentication token")
        creds.refresh(Request())
        save_token(record_from_credentials(creds), settings.token_path)
        return creds
    return None


def authorize(settings: Settings) -> Credentials | None:
    """
    Create authorized credentials using the OAuth client stored in 1Password.

    Returns None if the 1Password CLI is unavailable or the client credentials
    cannot be read.
    """
    ensure_token_directory(settings.token_path)

    if not check_cli(settings.onepassword):
        logger.error(
            "❌ 1Password CLI not found or not signed in.\n"
            "Please install 1Password CLI and sign in:\n"
            "   brew install --cask 1password-cli  # macOS\n"
            "   op signin"
        )
        return None

    client = get_credentials(settings.onepassword, settings.oauth.redirect_uri)
    if not client:
        return None

    logger.info(f"🔑 Client ID: {client.client_id}")
    logger.info(f"🔑 Client Secret: {'*' * len(client.client_secret)}")
    logger.info(f"🔑 Redirect URIs: {client.redirect_uris}")

    if settings.oauth.reuse_token:
        creds = _reuse_stored_token(client, settings)
        if creds:
            return creds

    logger.info("🔑 No existing token in use, starting new authentication flow")
    return get_new_token(client, settings)
