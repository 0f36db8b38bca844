from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, validates

from invoice_api.core.errors import ImmutableFieldError
from .base import Base
from .constraints import CUSTOMER_RULES, length_checks, rule_column
from .types import UTCDateTime, utcnow

class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = tuple(length_checks(CUSTOMER_RULES.values()))

    # id comes from the database on INSERT; created_at from the column default
    # right before it. Both are written by the ORM without attribute events;
    # the validator below lets through only writes of the value already held.
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = rule_column(CUSTOMER_RULES["name"])
    email: Mapped[str] = rule_column(CUSTOMER_RULES["email"])
    address: Mapped[str | None] = rule_column(CUSTOMER_RULES["address"])
    tax_id: Mapped[str | None] = rule_column(CUSTOMER_RULES["tax_id"])
    phone: Mapped[str | None] = rule_column(CUSTOMER_RULES["phone"])
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)

    def __init__(
        self,
        *,
        name: str | None = None,
        email: str | None = None,
        address: str | None = None,
        tax_id: str | None = None,
        phone: str | None = None,
    ) -> None:
        self.name = name
        self.email = email
        self.address = address
        self.tax_id = tax_id
        self.phone = phone

    @validates("id", "created_at")
    def _reject_identity_write(self, key: str, value):
        # Session.merge copies the loaded values back through attribute events
        if key in self.__dict__ and self.__dict__[key] == value:
            return value
        raise ImmutableFieldError(key)

    def __repr__(self) -> str:
        return f"<Customer(id={self.id!r}, name={self.name!r}, email={self.email!r})>"
