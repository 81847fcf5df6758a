from __future__ import annotations

from fastapi import Query, Request

from grocery_api.config import get_settings
from grocery_api.repositories.cancellation import CancellationToken
from grocery_api.repositories.customer_repository import CustomerRepository


def get_repository(request: Request) -> CustomerRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise RuntimeError("Customer repository has not been initialised")
    return repository


def get_cancellation_token(timeout: int | None = Query(default=None)) -> CancellationToken:
    """Per-request token; ``timeout`` (ms) sets a deadline no shorter than the configured minimum."""
    if timeout is None:
        return CancellationToken()
    minimum = get_settings().minimum_request_timeout_ms
    return CancellationToken.from_timeout_ms(max(minimum, timeout))
