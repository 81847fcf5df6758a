from __future__ import annotations

from pydantic import BaseModel, ConfigDict

MAX_NAME_LENGTH = 100


class Customer(BaseModel):
    """A grocery store customer.

    Instances are frozen: the store hands out the same objects to every
    caller, so a new id or name always means a new instance.
    """

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str | None = None


class CustomerList(BaseModel):
    customers: list[Customer]


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    id: int
    username: str


def validate_customer(customer: Customer) -> list[str]:
    """Return the reasons the customer is invalid (empty when it is valid)."""
    if not customer.name or not customer.name.strip():
        return ["Name is required"]
    if len(customer.name) > MAX_NAME_LENGTH:
        return ["Name too long"]
    return []
