"""
Google OAuth helpers for the Gmail (send) and Sheets (export) integrations.
"""

from __future__ import annotations
import errno
import os
from pathlib import Path
from typing import Optional
from google.oauth2.credentials import Credentials
from google.auth.exceptions import RefreshError
from google_auth_oauthlib.flow import InstalledAppFlow
from recruitdesk.logging import logger

REAUTH_HINT = "Run 'python scripts/bootstrap_oauth.py' to re-authorize."


class TokenExpiredError(Exception):
    """Raised when a stored OAuth token cannot be refreshed and needs re-authorization."""
    pass


def _save_token(token_file: Path, creds: Credentials) -> None:
    """Persist credentials. A read-only file system is logged, not raised."""
    try:
        token_file.write_text(creds.to_json(), encoding="utf-8")
    except OSError as e:
        if e.errno != errno.EROFS:
            raise
        logger.warning(f"Cannot save refreshed token to {token_file} (read-only file system)")


def reauthorize_token(
    token_path: str,
    scopes: list[str],
    client_secrets_path: Optional[str] = None,
) -> Credentials:
    """
    Run the installed-app OAuth flow in a browser and store the new token.

    Args:
        token_path: Where to write the token JSON
        scopes: OAuth scopes to request
        client_secrets_path: client_secret.json path; defaults to
            GOOGLE_CLIENT_SECRETS or ./credentials/client_secret.json

    Raises:
        FileNotFoundError: If the client secrets file is missing
    """
    client_secrets = Path(
        client_secrets_path
        or os.getenv("GOOGLE_CLIENT_SECRETS", "./credentials/client_secret.json")
    )
    if not client_secrets.exists():
        raise FileNotFoundError(
            f"Client secrets file not found: {client_secrets}. "
            f"Set GOOGLE_CLIENT_SECRETS or place client_secret.json in credentials/"
        )

    token_file = Path(token_path)
    token_file.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Starting OAuth authorization for {token_path}; complete it in the browser window")
    flow = InstalledAppFlow.from_client_secrets_file(str(client_secrets), scopes)
    creds = flow.run_local_server(port=0)

    if not creds.refresh_token:
        logger.warning(
            "No refresh token received. Revoke the app at https://myaccount.google.com/permissions "
            "and authorize again to get one."
        )
    _save_token(token_file, creds)
    logger.info(f"Token saved to {token_path}")
    return creds


def ensure_valid_credentials(
    token_path: str,
    scopes: list[str],
    auto_reauthorize: bool = False,
) -> Credentials:
    """
    Load stored credentials, refreshing them when expired.

    Args:
        token_path: Path to the authorized-user token JSON
        scopes: OAuth scopes the token must cover
        auto_reauthorize: Start the browser flow instead of failing when the
            token is missing or cannot be refreshed

    Raises:
        FileNotFoundError: Token file missing and auto_reauthorize is False
        TokenExpiredError: Refresh impossible and auto_reauthorize is False
    """
    token_file = Path(token_path)
    if not token_file.exists():
        if auto_reauthorize:
            logger.warning(f"Token file not found: {token_path}. Starting authorization...")
            return reauthorize_token(token_path, scopes)
        raise FileNotFoundError(f"Token file not found: {token_path}")

    creds = Credentials.from_authorized_user_file(str(token_file), scopes)
    if creds.valid:
        return creds

    if not creds.refresh_token:
        logger.warning(f"No refresh token in {token_path}")
        if auto_reauthorize:
            return reauthorize_token(token_path, scopes)
        raise TokenExpiredError(f"No refresh token for {token_path}. {REAUTH_HINT}")

    if creds.expired:
        from google.auth.transport.requests import Request
        try:
            creds.refresh(Request())
        except RefreshError as e:
            logger.error(f"Token refresh failed for {token_path}: {e}")
            if auto_reauthorize:
                return reauthorize_token(token_path, scopes)
            raise TokenExpiredError(f"Token refresh failed for {token_path}. {REAUTH_HINT}") from e
        _save_token(token_file, creds)
        logger.debug(f"Credentials refreshed for {token_path}")

    return creds
