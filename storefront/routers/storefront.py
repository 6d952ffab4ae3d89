from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session, sessionmaker

from storefront.db import get_db, get_session_factory
from storefront.dependencies import get_request_meta
from storefront.errors import OrderError, UnexpectedError
from storefront.schemas import FeeQuoteRequest, OrderCreateRequest
from storefront.services.audit_service import report_exception
from storefront.services.order_service import place_order, quote_delivery_fee
from storefront.services.post_commit import run_post_commit_tasks
from storefront.services.provider_factory import get_email_sender, get_message_sender

router = APIRouter(prefix='/api/storefront', tags=['storefront'])


@router.post('/{slug}/order')
def create_order(
    slug: str,
    payload: OrderCreateRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    email_sender=Depends(get_email_sender),
    message_sender=Depends(get_message_sender),
):
    try:
        placement = place_order(
            db,
            slug=slug,
            payload=payload,
            email_sender=email_sender,
            message_sender=message_sender,
            request_meta=get_request_meta(request),
        )
    except OrderError:
        raise
    except Exception as exc:
        report_exception(exc, operation='create_order', context={'slug': slug})
        raise UnexpectedError('Failed to create order') from exc

    background_tasks.add_task(
        run_post_commit_tasks,
        session_factory,
        placement.tasks,
        context={'order_id': placement.order_id, 'business_id': placement.business_id},
    )
    return placement.to_response()


@router.patch('/{slug}/order')
def calculate_delivery_fee(
    slug: str,
    payload: FeeQuoteRequest,
    db: Session = Depends(get_db),
):
    try:
        quote = quote_delivery_fee(db, slug=slug, payload=payload)
    except OrderError:
        raise
    except Exception as exc:
        report_exception(exc, operation='calculate_delivery_fee', context={'slug': slug})
        raise UnexpectedError('Failed to calculate delivery fee') from exc
    return {
        'success': True,
        'deliveryFee': float(quote.fee),
        'zone': quote.zone,
        'distance': quote.distance_km,
    }
