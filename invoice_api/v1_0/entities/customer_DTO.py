from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from invoice_api.v1_0.models import Customer
from .page import PageDTO

@dataclass(frozen=True, slots=True)
class CustomerDTO:
    id: int
    name: str
    email: str
    address: Optional[str]
    tax_id: Optional[str]
    phone: Optional[str]
    created_at: datetime

    @classmethod
    def from_model(cls, c: Customer) -> "CustomerDTO":
        return cls(
            id=c.id,
            name=c.name,
            email=c.email,
            address=c.address,
            tax_id=c.tax_id,
            phone=c.phone,
            created_at=c.created_at,
        )

CustomerPageDTO = PageDTO[CustomerDTO]
