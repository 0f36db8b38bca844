from typing import Any, Optional, Tuple, Type, TypeVar, Generic, Protocol, runtime_checkable
from sqlalchemy import Select, select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.core.errors import ConstraintViolationError

# --- models must expose .id ---
@runtime_checkable
class HasId(Protocol):
    id: Any  # PK column

ModelT = TypeVar("ModelT", bound=HasId)


class BaseRepository(Generic[ModelT]):
    """Session-explicit CRUD over one mapped model; integrity failures surface as ConstraintViolationError."""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def _flush(self, session: AsyncSession) -> None:
        try:
            await session.flush()
        except IntegrityError as e:
            await session.rollback()
            raise ConstraintViolationError.from_integrity_error(e) from e

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        await self._flush(session)
        return entity

    async def get_by_id(self, id_: Any, session: AsyncSession) -> Optional[ModelT]:
        stmt: Select = select(self.model).where(self.model.id == id_)
        return (await session.execute(stmt)).scalars().first()

    async def list_all(self, session: AsyncSession, *, order_by: Any | None = None) -> list[ModelT]:
        if order_by is None:
            order_by = self.model.id.desc()
        res = await session.execute(select(self.model).order_by(order_by))
        return list(res.scalars().all())

    async def list_paginated(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        *,
        order_by: Any | None = None,
    ) -> Tuple[list[ModelT], int]:
        if order_by is None:
            order_by = self.model.id.desc()

        page_q: Select = select(self.model).order_by(order_by).offset(offset).limit(limit)
        items = list((await session.execute(page_q)).scalars().all())
        total = int(await session.scalar(select(func.count(self.model.id))) or 0)
        return items, total

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        session: AsyncSession,
        *,
        allow: set[str],
    ) -> ModelT:
        """Assign the allowed keys of `data` and flush; other keys are ignored."""
        for k, v in data.items():
            if k in allow:
                setattr(entity, k, v)
        await self._flush(session)
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await self._flush(session)
