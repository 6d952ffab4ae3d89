from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    reply_to: str | None = None


class EmailSender(Protocol):
    def send_email(self, message: EmailMessage) -> str | None: ...


class MessageSender(Protocol):
    def is_configured(self) -> bool: ...

    def send_whatsapp(self, *, to: str, body: str) -> str | None: ...
