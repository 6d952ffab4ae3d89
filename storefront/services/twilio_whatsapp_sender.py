from __future__ import annotations

import base64
import json
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from storefront.config import settings
from storefront.services.phone_service import whatsapp_address


class TwilioWhatsAppSender:
    def __init__(self) -> None:
        self.account_sid = settings.twilio_account_sid
        self.auth_token = settings.twilio_auth_token
        self.from_number = settings.twilio_whatsapp_number
        self.base_url = settings.twilio_api_base_url.rstrip('/')
        self.timeout_seconds = settings.http_timeout_seconds

    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def send_whatsapp(self, *, to: str, body: str) -> str | None:
        if not self.is_configured():
            raise RuntimeError('TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_WHATSAPP_NUMBER are required')

        credentials = base64.b64encode(f'{self.account_sid}:{self.auth_token}'.encode('utf-8')).decode('ascii')
        form = {
            'From': whatsapp_address(self.from_number),
            'To': whatsapp_address(to),
            'Body': body,
        }
        req = Request(
            url=f'{self.base_url}/2010-04-01/Accounts/{self.account_sid}/Messages.json',
            data=urlencode(form).encode('utf-8'),
            headers={
                'Authorization': f'Basic {credentials}',
                'Content-Type': 'application/x-www-form-urlencoded',
            },
            method='POST',
        )
        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                parsed = json.loads(response.read().decode('utf-8') or '{}')
        except HTTPError as exc:
            detail = exc.read().decode('utf-8', errors='ignore') if exc.fp else ''
            raise RuntimeError(f'Twilio API error {exc.code}: {detail}') from exc
        except URLError as exc:
            raise RuntimeError(f'Twilio API network error: {exc.reason}') from exc
        return parsed.get('sid')
