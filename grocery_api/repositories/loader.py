from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import ValidationError

from grocery_api.models.schemas import Customer, CustomerList
from grocery_api.repositories.customer_repository import CustomerRepository
from grocery_api.repositories.errors import LoaderError, StoreError
from grocery_api.repositories.store import CustomerStore

Loader = Callable[[], Iterable[Customer]]

logger = logging.getLogger(__name__)


def json_file_loader(path: Path) -> Loader:
    """Loader reading ``{"customers": [{"id": ..., "name": ...}, ...]}`` from ``path``."""

    def _load() -> list[Customer]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LoaderError(f"Could not read customers file {path}: {exc}") from exc
        try:
            return CustomerList.model_validate_json(raw).customers
        except ValidationError as exc:
            raise LoaderError(f"Customers file {path} is malformed: {exc}") from exc

    return _load


def build_repository(loader: Loader) -> CustomerRepository:
    """Seed a fresh store from ``loader``; any failure is fatal to the caller."""
    customers = list(loader())
    try:
        store = CustomerStore(customers)
    except StoreError as exc:
        raise LoaderError(f"Invalid seed data: {exc}") from exc

    logger.info("customers.loaded", extra={"customer_count": len(store), "current_id": store.current_id})
    return CustomerRepository(store)
