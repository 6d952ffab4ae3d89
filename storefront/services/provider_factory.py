from __future__ import annotations

from functools import lru_cache

from storefront.config import settings
from storefront.services.mock_notification_provider import MockEmailSender, MockMessageSender
from storefront.services.resend_email_sender import ResendEmailSender
from storefront.services.twilio_whatsapp_sender import TwilioWhatsAppSender


def _provider() -> str:
    return settings.notification_provider.strip().lower()


@lru_cache(maxsize=1)
def get_email_sender():
    if _provider() == 'live':
        return ResendEmailSender()
    return MockEmailSender()


@lru_cache(maxsize=1)
def get_message_sender():
    if _provider() == 'live':
        return TwilioWhatsAppSender()
    return MockMessageSender()
