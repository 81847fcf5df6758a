from __future__ import annotations

from collections.abc import Iterable
from threading import Lock

from grocery_api.models.schemas import Customer
from grocery_api.repositories.errors import StoreError


class CustomerStore:
    """Thread-safe in-memory customer map plus the id counter.

    Two locks, both held only for a handful of dict operations:
    ``_id_lock`` serializes id allocation, ``_records_lock`` guards the map.
    Readers never wait on id allocation, and nothing sorts under a lock.
    """

    def __init__(self, customers: Iterable[Customer] = ()) -> None:
        self._id_lock = Lock()
        self._records_lock = Lock()
        self._records: dict[int, Customer] = {}

        for customer in customers:
            if customer.id <= 0:
                raise StoreError(f"Seeded customer has invalid id {customer.id}.")
            if customer.id in self._records:
                raise StoreError(f"Seeded customer id {customer.id} is not unique.")
            self._records[customer.id] = customer

        self._current_id = max(self._records, default=0)

    @property
    def current_id(self) -> int:
        with self._id_lock:
            return self._current_id

    def next_id(self) -> int:
        with self._id_lock:
            self._current_id += 1
            return self._current_id

    def insert(self, customer: Customer) -> None:
        with self._records_lock:
            if customer.id in self._records:
                raise StoreError(f"Customer id {customer.id} is already stored.")
            self._records[customer.id] = customer

    def get(self, customer_id: int) -> Customer | None:
        with self._records_lock:
            return self._records.get(customer_id)

    def set(self, customer_id: int, customer: Customer) -> None:
        with self._records_lock:
            if customer_id not in self._records:
                raise StoreError(f"Customer id {customer_id} is not stored.")
            self._records[customer_id] = customer

    def snapshot(self) -> list[Customer]:
        with self._records_lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._records_lock:
            return len(self._records)
