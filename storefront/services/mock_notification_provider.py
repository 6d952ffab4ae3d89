from __future__ import annotations

import logging

from storefront.services.notification_provider import EmailMessage

logger = logging.getLogger(__name__)


class MockEmailSender:
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    def send_email(self, message: EmailMessage) -> str | None:
        self.sent.append(message)
        logger.info('Mock email to %s: %s', message.to, message.subject)
        return f'mock-email-{len(self.sent)}'


class MockMessageSender:
    def __init__(self, *, configured: bool = True) -> None:
        self.configured = configured
        self.sent: list[tuple[str, str]] = []

    def is_configured(self) -> bool:
        return self.configured

    def send_whatsapp(self, *, to: str, body: str) -> str | None:
        self.sent.append((to, body))
        logger.info('Mock WhatsApp to %s (%s chars)', to, len(body))
        return f'mock-message-{len(self.sent)}'
