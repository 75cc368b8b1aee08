from __future__ import annotations
import base64
from email.mime.text import MIMEText
from typing import Optional

from googleapiclient.errors import HttpError

from recruitdesk.logging import logger


class GmailSender:
    """
    Sends plain-text emails through the Gmail API on behalf of the
    authorized account ("me").
    """

    #: OAuth scope needed to send mail.
    SCOPES_SEND = ["https://www.googleapis.com/auth/gmail.send"]

    def __init__(self, gmail_service, from_address: Optional[str] = None) -> None:
        """
        Args:
            gmail_service: googleapiclient Gmail service authorized with the send scope.
            from_address: Optional From header; Gmail uses the account address when omitted.
        """
        self.svc = gmail_service
        self.from_address = from_address

    def build_raw(self, to: str, subject: str, body: str, reply_to: Optional[str] = None) -> str:
        """RFC 2822 message, base64url-encoded as the API expects."""
        msg = MIMEText(body, "plain", "utf-8")
        msg["To"] = to
        msg["Subject"] = subject
        if self.from_address:
            msg["From"] = self.from_address
        if reply_to:
            msg["Reply-To"] = reply_to
        return base64.urlsafe_b64encode(msg.as_bytes()).decode("ascii")

    def send(self, to: str, subject: str, body: str, reply_to: Optional[str] = None) -> str:
        """
        Send one message and return its Gmail id.

        Raises:
            HttpError: If the Gmail API rejects the request
        """
        raw = self.build_raw(to, subject, body, reply_to=reply_to)
        try:
            sent = self.svc.users().messages().send(userId="me", body={"raw": raw}).execute()
        except HttpError as e:
            logger.error(f"Gmail send to {to} failed: {e}")
            raise
        message_id = sent.get("id", "")
        logger.info(f"Email sent to {to} (id={message_id})")
        return message_id
