"""Generic async repository over one ORM model.

Repositories flush but never commit; the Unit of Work owns the transaction.
Filters are passed as SQLAlchemy criteria (``Favorite.user_id == 3``) so
callers never build statements themselves.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from sportsync.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Lookup, insert, update and delete for a single model.

    Usage:
        class NotificationRepository(BaseRepository[Notification]):
            def __init__(self, session: AsyncSession):
                super().__init__(Notification, session)
    """

    def __init__(self, model: type[ModelT], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    def _select(self, *criteria: ColumnElement[bool]) -> Select[tuple[ModelT]]:
        stmt: Select[tuple[ModelT]] = select(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return stmt

    async def get_by_id(self, id: int) -> ModelT | None:
        """Get a single record by primary key."""
        return cast(ModelT | None, await self.session.get(self.model, id))

    async def find(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> Sequence[ModelT]:
        """Records matching every criterion, in the given order."""
        stmt = self._select(*criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self.session.execute(stmt)
        return cast(Sequence[ModelT], result.scalars().all())

    async def find_one(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        """First record matching every criterion."""
        result = await self.session.execute(self._select(*criteria).limit(1))
        return cast(ModelT | None, result.scalars().first())

    async def create(self, **values: Any) -> ModelT:
        """Insert a record and load its generated columns (id, defaults)."""
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: int, **values: Any) -> ModelT | None:
        """Apply values to one record; None if it does not exist."""
        instance = await self.get_by_id(id)
        if instance is None:
            return None
        for key, value in values.items():
            setattr(instance, key, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_where(self, *criteria: ColumnElement[bool], **values: Any) -> int:
        """Bulk update; returns the number of rows changed."""
        stmt = update(self.model).where(*criteria).values(**values)
        result = await self.session.execute(stmt)
        return cast(int, result.rowcount)

    async def delete(self, id: int) -> bool:
        """Delete one record by primary key."""
        instance = await self.get_by_id(id)
        if instance is None:
            return False
        await self.session.delete(instance)
        await self.session.flush()
        return True

    async def delete_where(self, *criteria: ColumnElement[bool]) -> int:
        """Bulk delete; returns the number of rows removed."""
        result = await self.session.execute(delete(self.model).where(*criteria))
        return cast(int, result.rowcount)
