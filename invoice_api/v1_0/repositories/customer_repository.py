from typing import Optional, List, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.v1_0.models import Customer
from invoice_api.v1_0.schemas import CustomerCreate, CustomerUpdate
from .base_repository import BaseRepository

MUTABLE_FIELDS = frozenset({"name", "email", "address", "tax_id", "phone"})

class CustomerRepository(BaseRepository[Customer]):
    def __init__(self):
        super().__init__(Customer)

    async def create_customer(self, payload: CustomerCreate, session: AsyncSession) -> Customer:
        c = Customer(
            name=payload.name,
            email=payload.email,
            address=payload.address,
            tax_id=payload.tax_id,
            phone=payload.phone,
        )
        await self.add(c, session)
        return c

    async def get_customer_by_id(self, customer_id: int, session: AsyncSession) -> Optional[Customer]:
        return await super().get_by_id(customer_id, session)

    async def get_by_email(self, email: str, session: AsyncSession) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.email == email)
        return (await session.execute(stmt)).scalars().first()

    async def get_by_tax_id(self, tax_id: str, session: AsyncSession) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.tax_id == tax_id)
        return (await session.execute(stmt)).scalars().first()

    async def update_customer(self, customer_id: int, payload: CustomerUpdate, session: AsyncSession) -> Optional[Customer]:
        c = await self.get_customer_by_id(customer_id, session)
        if not c:
            return None

        data = payload.model_dump(exclude_unset=True)
        return await self.update_fields(c, data, session, allow=set(MUTABLE_FIELDS))

    async def delete_customer(self, customer_id: int, session: AsyncSession) -> bool:
        c = await self.get_customer_by_id(customer_id, session)
        if not c:
            return False
        await self.delete(c, session)
        return True

    async def list_paginated(
    self, offset: int, limit: int, session: AsyncSession
    ) -> Tuple[List[Customer], int]:
        return await super().list_paginated(
            session, offset, limit, order_by=Customer.id.asc()
        )
