"""
Mock Gmail API service for testing.
"""

from typing import Dict, List, Optional


class MockGmailService:
    """Mock Gmail API service recording sent messages."""

    def __init__(self, error: Optional[Exception] = None):
        """
        Args:
            error: Exception raised by execute() instead of sending
        """
        self.sent: List[Dict] = []
        self.error = error

    def users(self):
        return MockUsersResource(self)


class MockUsersResource:
    def __init__(self, service: MockGmailService):
        self.service = service

    def messages(self):
        return MockMessagesResource(self.service)


class MockMessagesResource:
    def __init__(self, service: MockGmailService):
        self.service = service

    def send(self, userId: str, body: Dict):
        return MockRequest(self.service, userId, body)


class MockRequest:
    def __init__(self, service: MockGmailService, user_id: str, body: Dict):
        self.service = service
        self.user_id = user_id
        self.body = body

    def execute(self):
        if self.service.error is not None:
            raise self.service.error
        self.service.sent.append({"userId": self.user_id, **self.body})
        return {"id": f"msg-{len(self.service.sent)}", "threadId": "t-1"}


class RecordingSender:
    """MailSender double for the confirmation-email handler."""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[Dict] = []
        self.error = error

    def send(self, to: str, subject: str, body: str, reply_to: Optional[str] = None) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "body": body, "reply_to": reply_to})
        return f"msg-{len(self.sent)}"
