"""
Create or refresh the OAuth tokens used by recruit-desk.

- Gmail token (gmail.send) for candidate confirmation emails
- Sheets token (spreadsheets + drive) for candidate export
"""

import os
import sys
from pathlib import Path

import gspread
from dotenv import load_dotenv
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

load_dotenv()

CLIENT_SECRETS = Path(os.getenv("GOOGLE_CLIENT_SECRETS", "./credentials/client_secret.json"))
GMAIL_TOKEN    = Path(os.getenv("GOOGLE_GMAIL_TOKEN",   "./credentials/token_gmail.json"))
SHEETS_TOKEN   = Path(os.getenv("GOOGLE_SHEETS_TOKEN",  "./credentials/token_sheets.json"))


def _scopes(name: str, default: str) -> list[str]:
    return [s.strip() for s in os.getenv(name, default).split(",") if s.strip()]


GMAIL_SCOPES  = _scopes("GOOGLE_GMAIL_SCOPES", "https://www.googleapis.com/auth/gmail.send")
SHEETS_SCOPES = _scopes(
    "GOOGLE_SHEETS_SCOPES",
    "https://www.googleapis.com/auth/spreadsheets,https://www.googleapis.com/auth/drive",
)

SHEET_ID  = os.getenv("GOOGLE_SHEET_ID", "")
WORKSHEET = os.getenv("EXPORT_WORKSHEET", "Candidates")


def ensure_token(token_path: Path, scopes: list[str]) -> Credentials:
    """
    Load, refresh or newly authorize a token for `scopes` and save it.

    Raises:
        FileNotFoundError: If a new authorization is needed and client_secret.json is missing
    """
    token_path.parent.mkdir(parents=True, exist_ok=True)
    creds = None

    if token_path.exists():
        try:
            creds = Credentials.from_authorized_user_file(str(token_path), scopes)
            print(f"[INFO] Loaded existing token from {token_path}")
        except ValueError as e:
            print(f"[WARN] Failed to load existing token: {e}")

    if creds and creds.valid:
        print(f"[OK] Token is valid for {token_path}")
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            from google.auth.transport.requests import Request
            creds.refresh(Request())
            token_path.write_text(creds.to_json(), encoding="utf-8")
            print(f"[OK] Token refreshed: {token_path}")
            return creds
        except RefreshError as e:
            print(f"[WARN] Token refresh failed: {e}; starting a new authorization")

    if not CLIENT_SECRETS.exists():
        raise FileNotFoundError(
            f"Client secrets file not found: {CLIENT_SECRETS}\n"
            f"Set GOOGLE_CLIENT_SECRETS to the path of client_secret.json"
        )

    print(f"\n{'='*80}")
    print(f"Authorizing {token_path.name}")
    print(f"Scopes: {', '.join(scopes)}")
    print(f"A browser window will open; complete the consent screen there.")
    print(f"{'='*80}\n")

    flow = InstalledAppFlow.from_client_secrets_file(str(CLIENT_SECRETS), scopes)
    creds = flow.run_local_server(
        port=0,
        open_browser=True,
        authorization_prompt_message="",
        success_message="Authorization successful! You can close this window.",
    )
    if not creds.refresh_token:
        print("[WARN] No refresh token received. Revoke access at "
              "https://myaccount.google.com/permissions and run this script again.")

    token_path.write_text(creds.to_json(), encoding="utf-8")
    print(f"[OK] New token saved to {token_path}")
    return creds


def check_sheet(creds: Credentials) -> None:
    if not SHEET_ID:
        print("[WARN] GOOGLE_SHEET_ID not set; skipping spreadsheet check")
        return
    sh = gspread.authorize(creds).open_by_key(SHEET_ID)
    tabs = [ws.title for ws in sh.worksheets()]
    print(f"[OK] Sheets: '{sh.title}' | tabs: {', '.join(tabs) or '-'}")
    if WORKSHEET not in tabs:
        print(f"[INFO] Tab '{WORKSHEET}' will be created on first export")


if __name__ == "__main__":
    if not CLIENT_SECRETS.exists() and not (GMAIL_TOKEN.exists() and SHEETS_TOKEN.exists()):
        print(f"[ERROR] Missing client secrets file: {CLIENT_SECRETS}")
        sys.exit(1)

    try:
        print("Step 1/2: Gmail (send) access")
        ensure_token(GMAIL_TOKEN, GMAIL_SCOPES)

        print("Step 2/2: Google Sheets access")
        sheets_creds = ensure_token(SHEETS_TOKEN, SHEETS_SCOPES)

        try:
            check_sheet(sheets_creds)
        except Exception as e:
            print(f"[WARN] Sheets check failed: {e}")

        print(f"\n[OK] Tokens ready:\n   Gmail : {GMAIL_TOKEN}\n   Sheets: {SHEETS_TOKEN}")
    except KeyboardInterrupt:
        print("\n[ERROR] Setup cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n[ERROR] Setup failed: {e}")
        sys.exit(1)
