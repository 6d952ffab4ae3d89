from __future__ import annotations

import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch
from urllib.parse import unquote

from sqlalchemy import select

from storefront.models import OrderNotification
from storefront.services.message_service import OrderSummary, SummaryLine
from storefront.services.mock_notification_provider import MockEmailSender, MockMessageSender
from storefront.services.notification_service import (
    plan_notifications,
    render_business_email,
    send_business_email,
    whatsapp_url,
)
from storefront.services.post_commit import PostCommitTask, run_post_commit_tasks

from sqlite_support import make_session_factory


class FailingEmailSender:
    def send_email(self, message):
        raise RuntimeError('Email API error 500: boom')


def _summary(**overrides) -> OrderSummary:
    values = dict(
        order_id=5,
        order_number='ORD-000001001',
        status='PENDING',
        delivery_type='pickup',
        business_id=1,
        business_name='Bistro',
        business_type='RESTAURANT',
        language='en',
        currency='USD',
        customer_name='Ana',
        customer_phone='+15551234567',
        subtotal=Decimal('10'),
        delivery_fee=Decimal('0'),
        total=Decimal('10'),
        lines=(SummaryLine(quantity=1, name='Burger', price=Decimal('10')),),
    )
    values.update(overrides)
    return OrderSummary(**values)


def _business(**overrides) -> SimpleNamespace:
    values = dict(
        whatsapp_number='+355 69 000 1111',
        direct_notifications_enabled=False,
        order_notifications_enabled=False,
        order_notification_email=None,
        email='owner@bistro.example',
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class PlanNotificationsTests(unittest.TestCase):
    def test_link_fallback_when_direct_disabled(self) -> None:
        plan = plan_notifications(
            _business(), _summary(), text='Hi & bye', email_sender=MockEmailSender(), message_sender=MockMessageSender()
        )
        self.assertFalse(plan.direct_notification)
        self.assertTrue(plan.whatsapp_url.startswith('https://wa.me/355690001111?text='))
        self.assertEqual(unquote(plan.whatsapp_url.split('text=', 1)[1]), 'Hi & bye')
        self.assertEqual(plan.tasks, [])

    def test_link_fallback_when_channel_not_configured(self) -> None:
        plan = plan_notifications(
            _business(direct_notifications_enabled=True),
            _summary(),
            text='x',
            email_sender=MockEmailSender(),
            message_sender=MockMessageSender(configured=False),
        )
        self.assertFalse(plan.direct_notification)
        self.assertIsNotNone(plan.whatsapp_url)

    def test_direct_send_and_emails_are_planned(self) -> None:
        plan = plan_notifications(
            _business(direct_notifications_enabled=True, order_notifications_enabled=True),
            _summary(customer_email='ana@example.com'),
            text='x',
            email_sender=MockEmailSender(),
            message_sender=MockMessageSender(),
        )
        self.assertTrue(plan.direct_notification)
        self.assertTrue(plan.whatsapp_url.startswith('https://wa.me/355690001111?text='))
        self.assertEqual(
            [task.name for task in plan.tasks],
            ['customer_order_email', 'business_order_email', 'direct_whatsapp'],
        )

    def test_whatsapp_url_encodes_text(self) -> None:
        self.assertEqual(whatsapp_url('+1 555', 'a b\n'), 'https://wa.me/1555?text=a%20b%0A')


class BusinessEmailTests(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_subject_and_labels_follow_business_language(self) -> None:
        message = render_business_email(_summary(language='sq'), to='owner@bistro.example')
        self.assertEqual(message.subject, 'Porosi e Re: ORD-000001001 - Bistro')
        self.assertIn('Porosi e Re e Marrë!', message.html)
        self.assertIn('Burger', message.html)

    def test_salon_wording(self) -> None:
        message = render_business_email(_summary(business_type='SALON'), to='owner@salon.example')
        self.assertTrue(message.subject.startswith('New Booking Request: '))

    def test_successful_send_is_recorded(self) -> None:
        sender = MockEmailSender()
        send_business_email(self.db, summary=_summary(), to='owner@bistro.example', email_sender=sender)
        self.db.flush()
        row = self.db.execute(select(OrderNotification)).scalar_one()
        self.assertTrue(row.email_sent)
        self.assertIsNone(row.email_error)
        self.assertEqual(sender.sent[0].to, 'owner@bistro.example')

    def test_failed_send_is_recorded_not_raised(self) -> None:
        with patch('storefront.services.notification_service.report_exception') as report:
            send_business_email(self.db, summary=_summary(), to='owner@bistro.example', email_sender=FailingEmailSender())
        self.db.flush()
        row = self.db.execute(select(OrderNotification)).scalar_one()
        self.assertFalse(row.email_sent)
        self.assertEqual(row.email_error, 'Email API error 500: boom')
        report.assert_called_once()


class PostCommitTaskTests(unittest.TestCase):
    def test_failing_task_does_not_stop_the_rest(self) -> None:
        calls: list[str] = []

        def boom(db) -> None:
            calls.append('boom')
            raise RuntimeError('down')

        tasks = [
            PostCommitTask(name='first', run=lambda db: calls.append('first')),
            PostCommitTask(name='broken', run=boom),
            PostCommitTask(name='last', run=lambda db: calls.append('last')),
        ]
        with patch('storefront.services.post_commit.report_exception') as report:
            completed = run_post_commit_tasks(make_session_factory(), tasks, context={'order_id': 1})

        self.assertEqual(calls, ['first', 'boom', 'last'])
        self.assertEqual(completed, 2)
        report.assert_called_once()
        self.assertEqual(report.call_args.kwargs['operation'], 'broken')


if __name__ == '__main__':
    unittest.main()
