from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.models import Business, OrderNotification
from storefront.phrases import country_name, email_labels
from storefront.services.audit_service import report_exception
from storefront.services.message_service import (
    DELIVERY,
    OrderSummary,
    format_delivery_address,
    format_money,
    format_time,
)
from storefront.services.notification_provider import EmailMessage, EmailSender, MessageSender
from storefront.services.phone_service import whatsapp_link_number
from storefront.services.post_commit import PostCommitTask

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'
email_templates = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(['html']),
)
email_templates.filters['money'] = format_money

EMAIL_ERROR_MAX_LENGTH = 500


@dataclass
class DispatchPlan:
    direct_notification: bool
    whatsapp_url: str | None = None
    tasks: list[PostCommitTask] = field(default_factory=list)


def whatsapp_url(phone: str | None, text: str) -> str:
    return f'https://wa.me/{whatsapp_link_number(phone)}?text={quote(text, safe="")}'


def business_recipient(business: Business) -> str | None:
    if not business.order_notifications_enabled:
        return None
    return (business.order_notification_email or business.email or '').strip() or None


def admin_order_url(summary: OrderSummary) -> str:
    return f'{settings.admin_base_url.rstrip("/")}/stores/{summary.business_id}/orders/{summary.order_id}'


def _template_context(summary: OrderSummary) -> dict:
    return {
        'summary': summary,
        'labels': email_labels(summary.language, summary.business_type),
        'is_delivery': summary.delivery_type == DELIVERY,
        'delivery_address': format_delivery_address(
            summary.delivery_address,
            country_code=summary.country_code,
            postal_code=summary.postal_code,
            language=summary.language,
        ),
        'country': country_name(summary.country_code, summary.language),
        'delivery_time': format_time(summary.delivery_time, summary.language) or summary.postal_delivery_time,
        'currency': summary.currency,
    }


def render_business_email(summary: OrderSummary, *, to: str) -> EmailMessage:
    context = _template_context(summary)
    labels = context['labels']
    html = email_templates.get_template('email/order_business.html').render(
        **context,
        admin_url=admin_order_url(summary),
    )
    return EmailMessage(
        to=to,
        subject=f"{labels['newOrderSubject']}: {summary.order_number} - {summary.business_name}",
        html=html,
        reply_to=settings.email_reply_to,
    )


def render_customer_email(summary: OrderSummary) -> EmailMessage:
    context = _template_context(summary)
    labels = context['labels']
    html = email_templates.get_template('email/order_customer.html').render(**context)
    return EmailMessage(
        to=summary.customer_email or '',
        subject=f"{labels['order']} {summary.order_number} - {summary.business_name}",
        html=html,
    )


def send_customer_email(db: Session, *, summary: OrderSummary, email_sender: EmailSender) -> None:
    message_id = email_sender.send_email(render_customer_email(summary))
    logger.info('Customer email for order %s sent (%s)', summary.order_number, message_id)


def send_business_email(db: Session, *, summary: OrderSummary, to: str, email_sender: EmailSender) -> None:
    notification = OrderNotification(
        business_id=summary.business_id,
        order_id=summary.order_id,
        order_number=summary.order_number,
        order_status=summary.status,
        customer_name=summary.customer_name,
        total=summary.total,
        email_sent=False,
    )
    db.add(notification)
    try:
        email_sender.send_email(render_business_email(summary, to=to))
    except Exception as exc:
        # The attempt is still recorded; the error goes on the row.
        notification.email_error = str(exc)[:EMAIL_ERROR_MAX_LENGTH]
        report_exception(
            exc,
            operation='business_order_email',
            context={'order_id': summary.order_id, 'business_id': summary.business_id},
        )
        return
    notification.email_sent = True


def send_direct_whatsapp(
    db: Session, *, summary: OrderSummary, to: str, text: str, message_sender: MessageSender
) -> None:
    sid = message_sender.send_whatsapp(to=to, body=text)
    logger.info('Direct WhatsApp for order %s sent (%s)', summary.order_number, sid)


def plan_notifications(
    business: Business,
    summary: OrderSummary,
    *,
    text: str,
    email_sender: EmailSender,
    message_sender: MessageSender,
) -> DispatchPlan:
    """Decide which channels fire for a committed order.

    Nothing is sent here; the returned tasks run after the response.
    The wa.me link is returned on both paths as the fallback for a failed
    direct send.
    """
    tasks: list[PostCommitTask] = []
    link = whatsapp_url(business.whatsapp_number, text)

    if summary.customer_email:
        tasks.append(
            PostCommitTask(
                name='customer_order_email',
                run=lambda db: send_customer_email(db, summary=summary, email_sender=email_sender),
            )
        )

    recipient = business_recipient(business)
    if recipient:
        tasks.append(
            PostCommitTask(
                name='business_order_email',
                run=lambda db: send_business_email(db, summary=summary, to=recipient, email_sender=email_sender),
            )
        )

    direct = bool(
        business.direct_notifications_enabled and business.whatsapp_number and message_sender.is_configured()
    )
    if direct:
        to = business.whatsapp_number
        tasks.append(
            PostCommitTask(
                name='direct_whatsapp',
                run=lambda db: send_direct_whatsapp(
                    db, summary=summary, to=to, text=text, message_sender=message_sender
                ),
            )
        )
        return DispatchPlan(direct_notification=True, whatsapp_url=link, tasks=tasks)

    return DispatchPlan(direct_notification=False, whatsapp_url=link, tasks=tasks)
