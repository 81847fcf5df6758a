from __future__ import annotations

from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from grocery_api.models.schemas import Customer
from grocery_api.repositories.cancellation import CancellationToken
from grocery_api.repositories.customer_repository import CustomerRepository
from grocery_api.repositories.errors import ErrorKind, Result
from grocery_api.services.auth_dependencies import get_current_user, require_api_key
from grocery_api.services.customer_dependencies import get_cancellation_token, get_repository

T = TypeVar("T")

router = APIRouter(
    prefix="/api/customer",
    tags=["customers"],
    dependencies=[Depends(require_api_key), Depends(get_current_user)],
)

_STATUS_BY_ERROR = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.CANCELLED: 408,
}


def _unwrap(result: Result[T]) -> T:
    if result.error is not None:
        raise HTTPException(status_code=_STATUS_BY_ERROR[result.error], detail="\n".join(result.messages))
    return result.value  # type: ignore[return-value]


# Sync handlers run on the threadpool, so repository calls execute concurrently.
@router.get("/{customer_id}", response_model=Customer)
def get_customer(
    customer_id: int,
    repository: CustomerRepository = Depends(get_repository),
    token: CancellationToken = Depends(get_cancellation_token),
) -> Customer:
    return _unwrap(repository.get_by_id(token, customer_id))


@router.get("", response_model=list[Customer])
def list_customers(
    from_row: int = Query(default=0, alias="fromRow"),
    page_size: int | None = Query(default=None, alias="pageSize"),
    sort_by: str = Query(default="id", alias="sortBy"),
    repository: CustomerRepository = Depends(get_repository),
    token: CancellationToken = Depends(get_cancellation_token),
) -> list[Customer] | Response:
    customers = _unwrap(repository.get_collection(token, from_row=from_row, count=page_size, sort_by=sort_by))
    if not customers:
        return Response(status_code=204)
    return customers


@router.put("", response_model=Customer, status_code=201)
def add_customer(
    customer: Customer,
    repository: CustomerRepository = Depends(get_repository),
    token: CancellationToken = Depends(get_cancellation_token),
) -> Customer:
    return _unwrap(repository.add(token, customer))


@router.post("", response_model=Customer)
def update_customer(
    customer: Customer,
    repository: CustomerRepository = Depends(get_repository),
    token: CancellationToken = Depends(get_cancellation_token),
) -> Customer:
    return _unwrap(repository.update(token, customer))
