"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations: the abstract async CRUD interface, a concrete
SQLModel implementation of it, and helpers for filtering and paging
select statements.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLModel Session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record.

        Args:
            entity: SQLModel instance with updated fields

        Returns:
            Updated entity instance
        """

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """


class SQLModelRepository(AsyncBaseRepository[EntityType]):
    """Default implementation of the CRUD interface for entities with an ``id`` primary key.

    ``create``/``update``/``delete`` commit immediately. Multi-step operations
    that must be atomic use ``stage``/``remove`` and let the caller commit.
    """

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def stage(self, entity: EntityType) -> EntityType:
        """Add ``entity`` to the current transaction and flush it so generated keys are available."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def remove(self, entity: EntityType) -> None:
        """Mark ``entity`` for deletion in the current transaction."""
        await self.session.delete(entity)
        await self.session.flush()

    async def count(self, stmt=None) -> int:
        """Count rows of ``stmt`` (default: the whole table)."""
        base = stmt if stmt is not None else select(self.model)
        result = await self.session.execute(select(func.count()).select_from(base.order_by(None).subquery()))
        return int(result.scalar_one())

    async def paginate(self, stmt, page: int, page_size: int) -> Tuple[List[Any], int]:
        """Run ``stmt`` for one page and return ``(rows, total)``."""
        total = await self.count(stmt)
        paged = QueryBuilder.apply_pagination(stmt, page_size, (page - 1) * page_size)
        result = await self.session.execute(paged)
        return list(result.scalars().all()), total


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters; None values are ignored

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, columns: Sequence[Any], term: Optional[str]):
        """Case-insensitive ``contains`` match of ``term`` over any of ``columns``.

        Args:
            stmt: SQLModel select statement
            columns: Column attributes to search
            term: Search text; empty values leave the statement untouched

        Returns:
            Modified select statement
        """
        if not term:
            return stmt
        pattern = f"%{term.lower()}%"
        return stmt.where(or_(*[func.lower(column).like(pattern) for column in columns]))

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0
