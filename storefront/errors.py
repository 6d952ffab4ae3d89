from __future__ import annotations

from decimal import Decimal


class OrderError(Exception):
    """Caller-facing failure with a fixed HTTP status and message."""

    status_code = 400
    code = 'ORDER_ERROR'

    def __init__(self, error: str, *, status_code: int | None = None, **extra) -> None:
        super().__init__(error)
        self.message = error
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_body(self) -> dict:
        body: dict = {'error': self.message}
        for key, value in self.extra.items():
            if value is None:
                continue
            body[key] = float(value) if isinstance(value, Decimal) else value
        return body


class NotFoundError(OrderError):
    status_code = 404
    code = 'NOT_FOUND'


class ValidationError(OrderError):
    code = 'VALIDATION_ERROR'


class BusinessClosedError(OrderError):
    code = 'CLOSED'


class ServiceDisabledError(OrderError):
    code = 'DELIVERY_DISABLED'


class ConfigMissingError(OrderError):
    code = 'CONFIG_MISSING'


class OutOfRangeError(OrderError):
    code = 'OUT_OF_RANGE'


class FeeMismatchError(OrderError):
    code = 'FEE_MISMATCH'


class InsufficientStockError(OrderError):
    code = 'INSUFFICIENT_STOCK'


class ConflictError(OrderError):
    status_code = 409
    code = 'CONFLICT'


class UnexpectedError(OrderError):
    status_code = 500
    code = 'INTERNAL'
