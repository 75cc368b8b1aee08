"""
Input validation utilities.
"""

from __future__ import annotations
from typing import Any, Dict
from recruitdesk.logging import logger


def validate_email_address(email: Any) -> bool:
    """
    Minimal sanity check for an outgoing recipient address.

    Args:
        email: Address as stored on the candidate

    Returns:
        True if it is a non-empty string containing "@", False otherwise
    """
    if not isinstance(email, str):
        logger.warning(f"Email address is not a string: {type(email)}")
        return False

    trimmed = email.strip()
    if not trimmed or "@" not in trimmed:
        logger.warning(f"Invalid email address: {email!r}")
        return False

    return True


def validate_candidate_row(row: Dict[str, Any]) -> bool:
    """
    Validate a raw row returned by the candidates table.

    Args:
        row: Row dictionary (snake_case keys)

    Returns:
        True if it is a dict with a non-empty id, False otherwise
    """
    if not isinstance(row, dict):
        logger.warning(f"Candidate row is not a dictionary: {type(row)}")
        return False

    row_id = row.get("id")
    if row_id is None or not str(row_id).strip():
        logger.warning(f"Candidate row without id skipped: name={row.get('name')!r}")
        return False

    return True


def validate_spreadsheet_id(sheet_id: Any) -> bool:
    """
    Validate Google Sheet ID.

    Args:
        sheet_id: Google Sheet ID string

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(sheet_id, str):
        logger.warning(f"Sheet ID is not a string: {type(sheet_id)}")
        return False

    sheet_id_trimmed = sheet_id.strip()
    if not sheet_id_trimmed:
        logger.warning("Sheet ID is empty")
        return False

    # Google Sheet IDs are typically 44 characters long
    if len(sheet_id_trimmed) < 20 or len(sheet_id_trimmed) > 100:
        logger.warning(f"Sheet ID length seems invalid: {len(sheet_id_trimmed)} characters")
        return False

    return True
