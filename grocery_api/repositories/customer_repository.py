"""
In-memory customer repository.

Every operation takes a ``CancellationToken`` (checked on entry only) and
returns a ``Result`` whose ``error`` is one of ``ErrorKind`` on failure, so the
web layer can map outcomes to responses without reading message text.
Store invariant violations (``StoreError``) are bugs and propagate as
exceptions.
"""

from __future__ import annotations

from enum import Enum

from grocery_api.models.schemas import Customer, validate_customer
from grocery_api.observability.repository import instrument_repository_call
from grocery_api.repositories.cancellation import CancellationToken
from grocery_api.repositories.errors import CANCELLED_MESSAGE, ErrorKind, Result
from grocery_api.repositories.store import CustomerStore


class SortKey(str, Enum):
    ID = "id"
    NAME = "name"


def parse_sort_key(sort_by: str | None) -> SortKey | None:
    """Map a client sort parameter to a ``SortKey``; ``None`` means storage order.

    Matching is case-insensitive. Raises ``ValueError`` for unknown keys.
    """
    if not sort_by:
        return None
    try:
        return SortKey(sort_by.lower())
    except ValueError:
        raise ValueError(f"Invalid sortBy parameter '{sort_by}'.") from None


def _sorted(customers: list[Customer], key: SortKey | None) -> list[Customer]:
    if key is SortKey.ID:
        return sorted(customers, key=lambda c: c.id)
    if key is SortKey.NAME:
        return sorted(customers, key=lambda c: ((c.name or "").upper(), c.id))
    return customers


def _cancelled() -> Result:
    return Result.failure(ErrorKind.CANCELLED, CANCELLED_MESSAGE)


class CustomerRepository:
    def __init__(self, store: CustomerStore) -> None:
        self._store = store

    @property
    def current_id(self) -> int:
        """The most recently allocated (or highest seeded) customer id."""
        return self._store.current_id

    def get_by_id(self, token: CancellationToken, customer_id: int) -> Result[Customer]:
        def _run() -> Result[Customer]:
            if token.cancelled:
                return _cancelled()
            customer = self._store.get(customer_id)
            if customer is None:
                return Result.failure(ErrorKind.NOT_FOUND, f"No matching customer found (id {customer_id}).")
            return Result.success(customer)

        return instrument_repository_call(operation="get_by_id", fn=_run, customer_id=customer_id)

    def get_collection(
        self,
        token: CancellationToken,
        from_row: int = 0,
        count: int | None = None,
        sort_by: str | None = "id",
    ) -> Result[list[Customer]]:
        """Return ``count`` customers starting at ``from_row`` in ``sort_by`` order.

        ``count=None`` means "all remaining rows". A request reaching past the
        end is clamped to the rows available; the request is rejected when
        ``from_row`` is at or past the end, or beyond the clamped count.
        """

        def _run() -> Result[list[Customer]]:
            if token.cancelled:
                return _cancelled()

            customers = self._store.snapshot()
            total = len(customers)

            if from_row < 0 or (count is not None and count < 0):
                return Result.failure(ErrorKind.INVALID_ARGUMENT, f"Invalid range {from_row} .. {count}.")

            rows = count
            if rows is None or from_row + rows > total:
                rows = total - from_row

            if total == 0 and from_row == 0:
                rows = 0
            elif from_row >= total or from_row > rows:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, f"Invalid range {from_row} .. {rows}.")

            try:
                key = parse_sort_key(sort_by)
            except ValueError as exc:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, str(exc))

            return Result.success(_sorted(customers, key)[from_row : from_row + rows])

        return instrument_repository_call(
            operation="get_collection",
            fn=_run,
            from_row=from_row,
            count=count,
            sort_by=sort_by,
        )

    def add(self, token: CancellationToken, customer: Customer) -> Result[Customer]:
        """Store a new customer under a freshly allocated id.

        Clients must not choose ids: a non-zero ``customer.id`` is rejected and
        the store is left untouched.
        """

        def _run() -> Result[Customer]:
            if token.cancelled:
                return _cancelled()
            if customer.id != 0:
                return Result.failure(
                    ErrorKind.INVALID_ARGUMENT,
                    f"Attempt to add a customer with non zero Id ({customer.id}).",
                )
            reasons = validate_customer(customer)
            if reasons:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, *reasons)

            stored = customer.model_copy(update={"id": self._store.next_id()})
            self._store.insert(stored)
            return Result.success(stored)

        return instrument_repository_call(operation="add", fn=_run, customer_id=customer.id)

    def update(self, token: CancellationToken, customer: Customer) -> Result[Customer]:
        def _run() -> Result[Customer]:
            if token.cancelled:
                return _cancelled()
            reasons = validate_customer(customer)
            if reasons:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, *reasons)
            # Customers are never removed, so an id seen here stays valid for set().
            if self._store.get(customer.id) is None:
                return Result.failure(
                    ErrorKind.NOT_FOUND,
                    f"No matching customer to update found (id {customer.id}).",
                )
            self._store.set(customer.id, customer)
            return Result.success(customer)

        return instrument_repository_call(operation="update", fn=_run, customer_id=customer.id)
