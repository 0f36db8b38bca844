from typing import Any, Literal, Optional
from sqlalchemy.exc import IntegrityError

ViolationKind = Literal["unique", "not_null", "check", "unknown"]


class InvoiceAPIError(Exception):
    """Base class for errors raised by the data-access layer."""


class ConstraintViolationError(InvoiceAPIError):
    """A write was rejected by a database integrity constraint."""

    def __init__(self, kind: ViolationKind, detail: str) -> None:
        super().__init__(f"Constraint violation ({kind}): {detail}")
        self.kind = kind
        self.detail = detail

    @classmethod
    def from_integrity_error(cls, exc: IntegrityError) -> "ConstraintViolationError":
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        return cls(_classify(detail), detail)


class ImmutableFieldError(InvoiceAPIError):
    """Attempt to assign a field that only the persistence layer may set."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' is immutable")
        self.field = field


class CustomerNotFoundError(InvoiceAPIError):
    def __init__(self, customer_id: Optional[Any] = None) -> None:
        super().__init__("Customer not found.")
        self.customer_id = customer_id


def _classify(message: str) -> ViolationKind:
    # sqlite: "UNIQUE constraint failed: customers.email"
    # postgres: 'duplicate key value violates unique constraint "uq_customers_email"'
    m = message.lower()
    if "unique" in m or "duplicate key" in m:
        return "unique"
    if "not null" in m or "not-null" in m:
        return "not_null"
    if "check" in m:
        return "check"
    return "unknown"
