"""
Configuration management with validation and client/storage bootstrap.
"""

from __future__ import annotations
import os
from typing import Optional, TypedDict
import gspread

from dotenv import load_dotenv
from googleapiclient.discovery import build

from recruitdesk.auth import ensure_valid_credentials
from recruitdesk.gmail.sender import GmailSender
from recruitdesk.logging import logger
from recruitdesk.sheets.exporter import SheetsExporter
from recruitdesk.storage.local_state import AlertLedger, InMemoryAlertLedger
from recruitdesk.supabase.client import SupabaseCandidateSource


class Config(TypedDict):
    """Typed configuration dictionary."""
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_ACCESS_TOKEN: str | None
    CANDIDATES_TABLE: str
    MONITOR_INTERVAL: int
    ALERT_WINDOW_MINUTES: int
    TOAST_DURATION_SECONDS: int
    SYSTEM_NOTIFICATIONS: bool
    USE_REDIS: bool
    REDIS_HOST: str
    REDIS_PORT: int
    REDIS_DB: int
    REDIS_KEY_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str | None
    HEALTH_CHECK_ENABLED: bool
    HEALTH_CHECK_PORT: int
    GMAIL_TOKEN: str | None
    GMAIL_SCOPES: list[str]
    SHEETS_TOKEN: str | None
    SHEETS_SCOPES: list[str]
    SHEET_ID: str | None
    EXPORT_WORKSHEET: str
    EXPORT_TIMEZONE: str
    EMAIL_FROM: str | None
    EMAIL_REPLY_TO: str | None
    AUTO_REAUTHORIZE: bool


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _optional(name: str) -> str | None:
    return os.getenv(name, "").strip() or None


def _scopes(name: str, default: str) -> list[str]:
    return [s.strip() for s in os.getenv(name, default).split(",") if s.strip()]


def _load_env() -> Config:
    """
    Load environment variables and return validated configuration.

    Required vars:
      - SUPABASE_URL, SUPABASE_KEY

    Optional vars with defaults:
      - MONITOR_INTERVAL (default: 60, seconds, 10..3600)
      - ALERT_WINDOW_MINUTES (default: 10, 1..120)
      - TOAST_DURATION_SECONDS (default: 10)
      - SYSTEM_NOTIFICATIONS (default: "true")
      - USE_REDIS (default: "false"), REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_KEY_PREFIX
      - LOG_LEVEL (default: "INFO"), LOG_FILE (default: None)
      - HEALTH_CHECK_ENABLED (default: "true"), HEALTH_CHECK_PORT (default: 8080)
      - GOOGLE_GMAIL_TOKEN, GOOGLE_SHEETS_TOKEN, GOOGLE_SHEET_ID (integrations off when unset)
    """
    load_dotenv()

    supabase_url = os.getenv("SUPABASE_URL", "").strip()
    supabase_key = os.getenv("SUPABASE_KEY", "").strip()
    if not supabase_url:
        raise ValueError("SUPABASE_URL environment variable is required")
    if not supabase_key:
        raise ValueError("SUPABASE_KEY environment variable is required")
    if not supabase_url.startswith(("http://", "https://")):
        raise ValueError(f"SUPABASE_URL must be an http(s) URL, got {supabase_url}")

    monitor_interval = int(os.getenv("MONITOR_INTERVAL", "60"))
    if not (10 <= monitor_interval <= 3600):
        raise ValueError(
            f"MONITOR_INTERVAL must be between 10 and 3600 seconds, got {monitor_interval}"
        )

    window = int(os.getenv("ALERT_WINDOW_MINUTES", "10"))
    if not (1 <= window <= 120):
        raise ValueError(f"ALERT_WINDOW_MINUTES must be between 1 and 120, got {window}")

    toast_seconds = int(os.getenv("TOAST_DURATION_SECONDS", "10"))
    if toast_seconds < 1:
        raise ValueError(f"TOAST_DURATION_SECONDS must be at least 1, got {toast_seconds}")

    redis_port = int(os.getenv("REDIS_PORT", "6379"))
    if not (1 <= redis_port <= 65535):
        raise ValueError(f"REDIS_PORT must be between 1 and 65535, got {redis_port}")

    health_check_port = int(os.getenv("HEALTH_CHECK_PORT", "8080"))
    if not (1024 <= health_check_port <= 65535):
        raise ValueError(
            f"HEALTH_CHECK_PORT must be between 1024 and 65535, got {health_check_port}"
        )

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    use_redis = _flag("USE_REDIS", "false")

    cfg: Config = {
        "SUPABASE_URL": supabase_url,
        "SUPABASE_KEY": supabase_key,
        "SUPABASE_ACCESS_TOKEN": _optional("SUPABASE_ACCESS_TOKEN"),
        "CANDIDATES_TABLE": os.getenv("CANDIDATES_TABLE", "candidates").strip(),
        "MONITOR_INTERVAL": monitor_interval,
        "ALERT_WINDOW_MINUTES": window,
        "TOAST_DURATION_SECONDS": toast_seconds,
        "SYSTEM_NOTIFICATIONS": _flag("SYSTEM_NOTIFICATIONS", "true"),
        "USE_REDIS": use_redis,
        "REDIS_HOST": os.getenv("REDIS_HOST", "localhost").strip(),
        "REDIS_PORT": redis_port,
        "REDIS_DB": int(os.getenv("REDIS_DB", "0")),
        "REDIS_KEY_PREFIX": os.getenv("REDIS_KEY_PREFIX", "recruitdesk:alerts").strip(),
        "LOG_LEVEL": log_level,
        "LOG_FILE": _optional("LOG_FILE"),
        "HEALTH_CHECK_ENABLED": _flag("HEALTH_CHECK_ENABLED", "true"),
        "HEALTH_CHECK_PORT": health_check_port,
        "GMAIL_TOKEN": _optional("GOOGLE_GMAIL_TOKEN"),
        "GMAIL_SCOPES": _scopes("GOOGLE_GMAIL_SCOPES", "https://www.googleapis.com/auth/gmail.send"),
        "SHEETS_TOKEN": _optional("GOOGLE_SHEETS_TOKEN"),
        "SHEETS_SCOPES": _scopes(
            "GOOGLE_SHEETS_SCOPES",
            "https://www.googleapis.com/auth/spreadsheets,https://www.googleapis.com/auth/drive",
        ),
        "SHEET_ID": _optional("GOOGLE_SHEET_ID"),
        "EXPORT_WORKSHEET": os.getenv("EXPORT_WORKSHEET", "Candidates").strip(),
        "EXPORT_TIMEZONE": os.getenv("EXPORT_TIMEZONE", "Asia/Kolkata").strip(),
        "EMAIL_FROM": _optional("EMAIL_FROM"),
        "EMAIL_REPLY_TO": _optional("EMAIL_REPLY_TO"),
        "AUTO_REAUTHORIZE": _flag("AUTO_REAUTHORIZE", "false"),
    }

    logger.debug(
        f"Configuration loaded: USE_REDIS={use_redis}, LOG_LEVEL={log_level}, "
        f"MONITOR_INTERVAL={monitor_interval}s"
    )
    return cfg


def _init_source(cfg: Config) -> SupabaseCandidateSource:
    return SupabaseCandidateSource(
        base_url=cfg["SUPABASE_URL"],
        api_key=cfg["SUPABASE_KEY"],
        table=cfg["CANDIDATES_TABLE"],
        access_token=cfg["SUPABASE_ACCESS_TOKEN"],
    )


def _init_ledger(cfg: Config) -> AlertLedger:
    """
    Initialize the alert ledger with automatic fallback to InMemory.

    Args:
        cfg: Configuration dictionary

    Returns:
        AlertLedger instance (RedisAlertLedger or InMemoryAlertLedger)
    """
    if cfg["USE_REDIS"]:
        try:
            from recruitdesk.storage.redis_kv import RedisAlertLedger
            ledger = RedisAlertLedger(
                host=cfg["REDIS_HOST"],
                port=cfg["REDIS_PORT"],
                db=cfg["REDIS_DB"],
                key_prefix=cfg["REDIS_KEY_PREFIX"],
            )
            logger.info(f"Using Redis alert ledger at {cfg['REDIS_HOST']}:{cfg['REDIS_PORT']}")
            return ledger
        except Exception as e:
            logger.warning(f"Failed to connect to Redis: {e}. Falling back to InMemory ledger.")
            return InMemoryAlertLedger()

    logger.info("Using InMemory alert ledger (Redis disabled)")
    return InMemoryAlertLedger()


def _init_gmail_sender(cfg: Config) -> Optional[GmailSender]:
    """Gmail sender, or None when no Gmail token is configured."""
    if not cfg["GMAIL_TOKEN"]:
        logger.info("GOOGLE_GMAIL_TOKEN not set; candidate emails disabled")
        return None

    creds = ensure_valid_credentials(
        token_path=cfg["GMAIL_TOKEN"],
        scopes=cfg["GMAIL_SCOPES"],
        auto_reauthorize=cfg["AUTO_REAUTHORIZE"],
    )
    service = build("gmail", "v1", credentials=creds, cache_discovery=False)
    return GmailSender(service, from_address=cfg["EMAIL_FROM"])


def _init_sheets_exporter(cfg: Config) -> Optional[SheetsExporter]:
    """Sheets exporter, or None when Sheets export is not configured."""
    if not (cfg["SHEETS_TOKEN"] and cfg["SHEET_ID"]):
        logger.info("GOOGLE_SHEETS_TOKEN / GOOGLE_SHEET_ID not set; Sheets export disabled")
        return None

    creds = ensure_valid_credentials(
        token_path=cfg["SHEETS_TOKEN"],
        scopes=cfg["SHEETS_SCOPES"],
        auto_reauthorize=cfg["AUTO_REAUTHORIZE"],
    )
    return SheetsExporter(gspread.authorize(creds))
