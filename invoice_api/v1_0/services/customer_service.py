from typing import Awaitable, Callable, List, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.core.errors import ConstraintViolationError, CustomerNotFoundError, InvoiceAPIError
from invoice_api.core.logger import logger
from invoice_api.utils.tx import maybe_begin
from invoice_api.v1_0.models import Customer
from invoice_api.v1_0.schemas import CustomerCreate, CustomerUpdate
from invoice_api.v1_0.repositories import CustomerRepository
from invoice_api.v1_0.entities import CustomerDTO, CustomerPageDTO

T = TypeVar("T")

class CustomerService:
    def __init__(self, customer_repository: CustomerRepository) -> None:
        self.customer_repository = customer_repository
        self.PAGE_SIZE = 10

    async def _require(self, customer_id: int, db: AsyncSession) -> Customer:
        """
        Ensure a customer exists.

        Args:
            customer_id: Identifier of the customer to fetch.
            db: Active async database session.

        Returns:
            ORM customer entity if found.

        Raises:
            CustomerNotFoundError: If the customer does not exist.
        """
        c = await self.customer_repository.get_customer_by_id(customer_id, db)
        if not c:
            raise CustomerNotFoundError(customer_id)
        return c

    async def _write(self, op: str, run: Callable[[], Awaitable[T]], db: AsyncSession) -> T:
        """Run `run` inside a transaction, committing on success and rolling back on failure."""
        if not db.in_transaction():
            await db.begin()
        try:
            result = await run()
            await db.commit()
        except ConstraintViolationError as e:
            await db.rollback()
            logger.warning("[CustomerService] %s rejected (%s): %s", op, e.kind, e.detail)
            raise
        except InvoiceAPIError:
            await db.rollback()
            raise
        except Exception as e:
            await db.rollback()
            logger.error("[CustomerService] %s failed: %s", op, e, exc_info=True)
            raise
        return result

    async def create(self, payload: CustomerCreate, db: AsyncSession) -> CustomerDTO:
        """
        Create a new customer.

        The database assigns the id and created_at is stamped right before the
        INSERT; neither is taken from the payload.

        Args:
            payload: CustomerCreate data with customer fields.
            db: Active async database session.

        Returns:
            CustomerDTO representing the created customer.

        Raises:
            ConstraintViolationError: duplicate email or tax_id, missing or oversized field.
        """
        logger.info("[CustomerService] Creating customer: %s", payload.model_dump())

        async def _run() -> CustomerDTO:
            c = await self.customer_repository.create_customer(payload, db)
            logger.info("[CustomerService] Customer created ID=%s", c.id)
            return CustomerDTO.from_model(c)

        return await self._write("Create", _run, db)

    async def get(self, customer_id: int, db: AsyncSession) -> CustomerDTO:
        """
        Retrieve a single customer by its identifier.

        Raises:
            CustomerNotFoundError: If not found.
        """
        logger.debug(f"[CustomerService] Get customer ID={customer_id}")
        async with maybe_begin(db):
            c = await self._require(customer_id, db)
        return CustomerDTO.from_model(c)

    async def get_by_email(self, email: str, db: AsyncSession) -> CustomerDTO:
        """
        Retrieve a customer by exact email match.

        Args:
            email: Email address as stored.
            db: Active async database session.

        Returns:
            CustomerDTO with customer data.

        Raises:
            CustomerNotFoundError: If no customer has that email.
        """
        logger.debug(f"[CustomerService] Get customer email={email}")
        async with maybe_begin(db):
            c = await self.customer_repository.get_by_email(email, db)
        if not c:
            raise CustomerNotFoundError()
        return CustomerDTO.from_model(c)

    async def list_all(self, db: AsyncSession) -> List[CustomerDTO]:
        """
        List all customers without pagination, newest first.

        Args:
            db: Active async database session.

        Returns:
            List of CustomerDTO for all customers.
        """
        logger.debug("[CustomerService] List all customers")
        async with maybe_begin(db):
            rows = await self.customer_repository.list_all(db)
        return [CustomerDTO.from_model(c) for c in rows]

    async def list_paginated(self, page: int, db: AsyncSession) -> CustomerPageDTO:
        """
        List customers in a paginated format, oldest first.

        Uses PAGE_SIZE as the page size and returns pagination metadata.

        Args:
            page: Page number to retrieve (1-based; lower values are served as page 1).
            db: Active async database session.

        Returns:
            CustomerPageDTO with items and pagination metadata.
        """
        page = max(page, 1)
        page_size = self.PAGE_SIZE
        offset = (page - 1) * page_size

        async with maybe_begin(db):
            items, total = await self.customer_repository.list_paginated(
                offset=offset, limit=page_size, session=db
            )

        return CustomerPageDTO.build(
            [CustomerDTO.from_model(c) for c in items],
            page=page,
            page_size=page_size,
            total=total,
        )

    async def update_partial(
        self,
        customer_id: int,
        payload: CustomerUpdate,
        db: AsyncSession,
    ) -> CustomerDTO:
        """
        Partially update an existing customer (PATCH-style).

        Only fields present in the payload are applied; id and created_at are
        never touched.

        Raises:
            CustomerNotFoundError: If customer not found.
            ConstraintViolationError: If the new values break a constraint.
        """
        logger.info(
            "[CustomerService] Update customer ID=%s data=%s",
            customer_id,
            payload.model_dump(exclude_unset=True),
        )

        async def _run() -> CustomerDTO:
            c = await self.customer_repository.update_customer(customer_id, payload, db)
            if not c:
                raise CustomerNotFoundError(customer_id)
            return CustomerDTO.from_model(c)

        return await self._write(f"Update ID={customer_id}", _run, db)

    async def delete(self, customer_id: int, db: AsyncSession) -> bool:
        """
        Delete a customer by its identifier.

        Raises:
            CustomerNotFoundError: If customer not found.
        """
        logger.warning("[CustomerService] Delete customer ID=%s", customer_id)

        async def _run() -> bool:
            ok = await self.customer_repository.delete_customer(customer_id, db)
            if not ok:
                raise CustomerNotFoundError(customer_id)
            return True

        return await self._write(f"Delete ID={customer_id}", _run, db)
