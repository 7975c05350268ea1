from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.constants import MAX_ID, MIN_ID
from tuesday.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def storable_id(obj_id: int) -> bool:
    """Whether ``obj_id`` fits an integer primary key; larger values can never match a row."""
    return MIN_ID <= obj_id <= MAX_ID


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Generic repository with async CRUD operations."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def create_one(
        self,
        schema: CreateSchemaType,
        *,
        exclude_none: bool = False,
        auto_commit: bool = True,
    ) -> ModelType:
        """Create a single record."""
        data = schema.model_dump(exclude_none=exclude_none)
        instance = self.model(**data)
        self.session.add(instance)
        if auto_commit:
            await self.session.commit()
            await self.session.refresh(instance)
        else:
            await self.session.flush()
        return instance

    async def get_by_id(self, obj_id: int) -> ModelType | None:
        """Get a record by its primary key."""
        if not storable_id(obj_id):
            return None
        return await self.session.get(self.model, obj_id)

    async def exists(self, obj_id: int) -> bool:
        if not storable_id(obj_id):
            return False
        stmt = select(func.count()).select_from(self.model).where(self.model.id == obj_id)
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def update_by_id(
        self,
        obj_id: int,
        schema: UpdateSchemaType,
        *,
        exclude_none: bool = True,
        auto_commit: bool = True,
    ) -> ModelType | None:
        """Update a record by ID."""
        instance = await self.get_by_id(obj_id)
        if not instance:
            return None

        data = schema.model_dump(exclude_none=exclude_none)
        return await self.apply(instance, data, auto_commit=auto_commit)

    async def apply(
        self,
        instance: ModelType,
        data: dict,
        *,
        auto_commit: bool = True,
    ) -> ModelType:
        """Set the given attributes on an already loaded record."""
        for key, value in data.items():
            setattr(instance, key, value)

        if auto_commit:
            await self.session.commit()
            await self.session.refresh(instance)
        else:
            await self.session.flush()
        return instance

    async def delete_by_id(self, obj_id: int, *, auto_commit: bool = True) -> bool:
        """Delete a record by ID. Returns True if deleted."""
        instance = await self.get_by_id(obj_id)
        if not instance:
            return False
        await self.delete(instance, auto_commit=auto_commit)
        return True

    async def delete(self, instance: ModelType, *, auto_commit: bool = True) -> None:
        """Delete a loaded record; relationships to cascade over must already be loaded."""
        await self.session.delete(instance)
        if auto_commit:
            await self.session.commit()
