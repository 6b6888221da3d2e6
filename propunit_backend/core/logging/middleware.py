"""
Transaction ID propagation for log correlation.

Every request runs under a transaction ID taken from the `x-transaction-id`
header or freshly generated. It is echoed on the response and stamped on
each log record by TransactionIdFilter.
"""

import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

TRANSACTION_ID_HEADER = "x-transaction-id"

_current_txn: ContextVar[str | None] = ContextVar("propunit_transaction_id", default=None)


def generate_transaction_id() -> str:
    return uuid.uuid4().hex[:8]


def get_transaction_id() -> str:
    """Transaction ID of the current context, created on first use outside a request."""
    txn_id = _current_txn.get()
    if txn_id is None:
        txn_id = generate_transaction_id()
        _current_txn.set(txn_id)
    return txn_id


def set_transaction_id(txn_id: str) -> None:
    _current_txn.set(txn_id)


class TransactionIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.transaction_id = get_transaction_id()
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a transaction ID to each request.

    With `log_requests` on, one access record per request is written to
    `propunit_backend.requests` with the method, path, status and duration.
    """

    def __init__(self, app, log_requests: bool = False):
        super().__init__(app)
        self.log_requests = log_requests
        self.logger = logging.getLogger("propunit_backend.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get(TRANSACTION_ID_HEADER) or generate_transaction_id()
        set_transaction_id(txn_id)

        started = time.perf_counter()
        response = await call_next(request)
        response.headers[TRANSACTION_ID_HEADER] = txn_id

        if self.log_requests:
            self.logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response
