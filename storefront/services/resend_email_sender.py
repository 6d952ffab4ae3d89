from __future__ import annotations

import json
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from storefront.config import settings
from storefront.services.notification_provider import EmailMessage


class ResendEmailSender:
    def __init__(self) -> None:
        self.api_key = settings.email_api_key
        self.base_url = settings.email_api_base_url.rstrip('/')
        self.sender = settings.email_from
        self.timeout_seconds = settings.http_timeout_seconds

    def send_email(self, message: EmailMessage) -> str | None:
        if not self.api_key:
            raise RuntimeError('EMAIL_API_KEY is required')

        payload = {
            'from': self.sender,
            'to': [message.to],
            'subject': message.subject,
            'html': message.html,
        }
        reply_to = message.reply_to or settings.email_reply_to
        if reply_to:
            payload['reply_to'] = reply_to

        req = Request(
            url=f'{self.base_url}/emails',
            data=json.dumps(payload).encode('utf-8'),
            headers={
                'Authorization': f'Bearer {self.api_key}',
                'Content-Type': 'application/json',
            },
            method='POST',
        )
        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                parsed = json.loads(response.read().decode('utf-8') or '{}')
        except HTTPError as exc:
            body = exc.read().decode('utf-8', errors='ignore') if exc.fp else ''
            raise RuntimeError(f'Email API error {exc.code}: {body}') from exc
        except URLError as exc:
            raise RuntimeError(f'Email API network error: {exc.reason}') from exc
        return parsed.get('id')
