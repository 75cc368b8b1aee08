"""
Interview confirmation emails sent to candidates.

When a candidate is created or updated:
- status1 becomes "Confirmed" (or the round changes while it stays
  "Confirmed") -> confirmation email
- status1 becomes "Yet to Confirm" -> notification email
- anything else -> no email
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from recruitdesk.logging import logger
from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.utils.validation import validate_email_address

STATUS_CONFIRMED = "Confirmed"
STATUS_YET_TO_CONFIRM = "Yet to Confirm"
DEFAULT_INTERVIEW_TIME = "10:00 AM"
DATE_TO_BE_CONFIRMED = "To be confirmed"


class EmailType(str, Enum):
    CONFIRMED = "confirmed"
    YET_TO_CONFIRM = "yet_to_confirm"


class MailSender(Protocol):
    def send(self, to: str, subject: str, body: str, reply_to: Optional[str] = None) -> str: ...


@dataclass(frozen=True)
class EmailDecision:
    email_type: Optional[EmailType]
    reason: str = ""

    @property
    def should_send(self) -> bool:
        return self.email_type is not None


@dataclass(frozen=True)
class ConfirmationEmail:
    to: str
    subject: str
    body: str
    reply_to: Optional[str] = None


@dataclass(frozen=True)
class EmailOutcome:
    email_sent: bool
    message: str
    description: str
    variant: str = "default"


def decide_confirmation_email(
    candidate: CandidateRecord,
    is_new: bool,
    previous: Optional[CandidateRecord] = None,
) -> EmailDecision:
    """Which email (if any) a create/update of `candidate` should trigger."""
    status = candidate.status1
    prev_status = previous.status1 if previous else None

    if is_new:
        if status == STATUS_CONFIRMED:
            return EmailDecision(EmailType.CONFIRMED, "new candidate with Confirmed status")
        if status == STATUS_YET_TO_CONFIRM:
            return EmailDecision(EmailType.YET_TO_CONFIRM, "new candidate with Yet to Confirm status")
        return EmailDecision(None)

    if status == STATUS_CONFIRMED and prev_status != STATUS_CONFIRMED:
        return EmailDecision(EmailType.CONFIRMED, "status change to Confirmed")
    if (
        status == STATUS_CONFIRMED
        and previous is not None
        and previous.interview_round != candidate.interview_round
    ):
        return EmailDecision(EmailType.CONFIRMED, "round change while Confirmed")
    if status == STATUS_YET_TO_CONFIRM and prev_status != STATUS_YET_TO_CONFIRM:
        return EmailDecision(EmailType.YET_TO_CONFIRM, "status change to Yet to Confirm")
    return EmailDecision(None)


def format_interview_date(value: Optional[datetime]) -> str:
    """Long date such as "Monday, March 4, 2024"; "To be confirmed" when missing."""
    if value is None:
        return DATE_TO_BE_CONFIRMED
    try:
        return f"{value:%A}, {value:%B} {value.day}, {value.year}"
    except (ValueError, AttributeError):
        return DATE_TO_BE_CONFIRMED


def build_confirmation_email(
    candidate: CandidateRecord,
    email_type: EmailType,
    reply_to: Optional[str] = None,
) -> ConfirmationEmail:
    kind = "Confirmation" if email_type is EmailType.CONFIRMED else "Notification"
    subject = f"Interview {kind} - {candidate.position} at {candidate.client_name}"

    interview_time = candidate.interview_time.strip() or DEFAULT_INTERVIEW_TIME
    if email_type is EmailType.CONFIRMED:
        opening = "We are pleased to confirm your interview. Please find the details below."
    else:
        opening = (
            "Your interview has been proposed with the details below. "
            "We will reach out shortly to confirm the schedule."
        )

    lines = [
        f"Dear {candidate.name},",
        "",
        opening,
        "",
        f"Client: {candidate.client_name}",
        f"Position: {candidate.position}",
        f"Round: {candidate.interview_round}",
        f"Mode: {candidate.interview_mode}",
        f"Date: {format_interview_date(candidate.interview_date)}",
        f"Time: {interview_time}",
        "",
        "Best regards,",
        candidate.recruiter_name or "Recruitment Team",
    ]
    if reply_to:
        lines.append(reply_to)

    return ConfirmationEmail(
        to=candidate.email.strip(),
        subject=subject,
        body="\n".join(lines),
        reply_to=reply_to,
    )


def handle_candidate_email(
    sender: MailSender,
    candidate: CandidateRecord,
    is_new: bool,
    previous: Optional[CandidateRecord] = None,
    skip_email: bool = False,
    reply_to: Optional[str] = None,
) -> EmailOutcome:
    """
    Decide, compose and send the email for a saved candidate.

    Never raises: an invalid address or a failed send is reported in the
    outcome with variant "destructive".
    """
    verb = "added" if is_new else "updated"
    title = "Candidate Added" if is_new else "Candidate Updated"

    if skip_email:
        logger.info(f"Email skipped for {candidate.name}")
        return EmailOutcome(False, title, f"{candidate.name} {verb} successfully (email skipped)")

    decision = decide_confirmation_email(candidate, is_new, previous)
    if not decision.should_send:
        logger.debug(f"No email for {candidate.name}: status {candidate.status1!r}")
        return EmailOutcome(False, title, f"{candidate.name} {verb} successfully")

    failed = EmailOutcome(
        False,
        title,
        f"{candidate.name} {verb} successfully but email sending failed. Check the logs.",
        variant="destructive",
    )
    if not validate_email_address(candidate.email):
        return failed

    email = build_confirmation_email(candidate, decision.email_type, reply_to=reply_to)
    try:
        sender.send(email.to, email.subject, email.body, reply_to=email.reply_to)
    except Exception as e:
        logger.error(f"Sending {decision.email_type.value} email to {email.to} failed: {e}")
        return failed

    kind = "confirmation" if decision.email_type is EmailType.CONFIRMED else "notification"
    return EmailOutcome(
        True,
        f"{title} & Email Sent",
        f"{candidate.name} {verb} successfully and {kind} email sent to {email.to} ({decision.reason})",
    )
