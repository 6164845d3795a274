"""
Storefront Backend: Generic Resource Repository
===============================================

What:  Create / get / list / update / remove for one resource table.
How:   Constructed with an AsyncSession (one per request). Subclasses set the
       model, the rule table, the unique fields and the filter allow-list;
       ``prepare()`` normalizes validated values before they are stored.

Write path (create):
    ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌────────┐
    │ writable │──▶│ validate │──▶│ prepare  │──▶│ unique?  │──▶│ insert │
    │  fields  │   │ (rules)  │   │          │   │          │   │ commit │
    └──────────┘   └──────────┘   └──────────┘   └──────────┘   └────────┘

    update() loads the entity first (NotFoundError), validates only the
    supplied fields, re-checks uniqueness for supplied unique fields while
    excluding the entity's own id, then merges and commits. A rule failure
    raises before anything is assigned, so the stored row never changes.

Failure semantics:
    NotFoundError, ConflictError  domain failures (IntegrityError at commit is a conflict)
    ValidationError               a rule rejected a value
    InvalidIdentifierError        id is not a UUID
    DatabaseError                 any other SQLAlchemyError (logged, wrapped)

Known limitation:
    update() is read, merge, save with no version column. Two concurrent
    updates of the same row can lose one of the writes.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic.alias_generators import to_camel, to_snake
from sqlalchemy import Column, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import Base
from storefront.exceptions import (
    ConflictError,
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
)
from storefront.query_options import QueryOptions
from storefront.validation import Rule, check

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Managed by the repository/database, never taken from callers
_READ_ONLY = {"id", "created_at", "updated_at"}


class Repository(Generic[ModelT]):
    model: Type[ModelT]
    resource: str = "resource"
    rules: Mapping[str, Rule] = {}
    unique_fields: Tuple[str, ...] = ()
    filter_fields: Tuple[str, ...] = ()
    # Columns never used to order results
    internal_fields: Tuple[str, ...] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Helpers ───────────────────────────────────────────────────────────

    def parse_id(self, entity_id: Any) -> uuid.UUID:
        if isinstance(entity_id, uuid.UUID):
            return entity_id
        try:
            return uuid.UUID(str(entity_id))
        except ValueError:
            raise InvalidIdentifierError(resource=self.resource, identifier=str(entity_id))

    def column(self, name: str) -> Optional[Column]:
        """Table column by attribute name or camelCase alias; None if unknown or internal."""
        columns = self.model.__table__.columns
        for key in (name, to_snake(name)):
            if key in columns and key not in self.internal_fields:
                return columns[key]
        return None

    def writable(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        columns = self.model.__table__.columns
        return {
            key: value
            for key, value in values.items()
            if key in columns and key not in _READ_ONLY
        }

    def validate(self, values: Mapping[str, Any], partial: bool = False) -> None:
        failure = check(self.rules, values, partial=partial)
        if failure is not None:
            raise ValidationError(message=failure.reason, field=failure.field)

    def prepare(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize values that already passed validation. Override per resource."""
        return values

    @asynccontextmanager
    async def _store(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("Database error during %s on %s: %s", action, self.resource, e)
            raise DatabaseError(
                context={"resource": self.resource, "action": action, "error_type": type(e).__name__},
            ) from e

    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            # A concurrent writer took a unique value after check_unique() ran
            await self.session.rollback()
            logger.warning("Constraint violation during %s on %s: %s", action, self.resource, e.orig)
            field = to_camel(self.unique_fields[0]) if len(self.unique_fields) == 1 else None
            raise ConflictError(resource=self.resource, field=field) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Commit failed during %s on %s: %s", action, self.resource, e)
            raise DatabaseError(
                context={"resource": self.resource, "action": action, "error_type": type(e).__name__},
            ) from e

    async def check_unique(
        self,
        values: Mapping[str, Any],
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        """Raise ConflictError if another row already holds a supplied unique value."""
        for field in self.unique_fields:
            if field not in values:
                continue
            stmt = select(self.model.id).where(getattr(self.model, field) == values[field])
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            async with self._store("unique check"):
                existing = (await self.session.execute(stmt.limit(1))).scalar_one_or_none()
            if existing is not None:
                raise ConflictError(resource=self.resource, field=to_camel(field))

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        candidate = self.writable(values)
        self.validate(candidate)
        candidate = self.prepare(candidate)
        await self.check_unique(candidate)

        entity = self.model(**candidate)
        self.session.add(entity)
        await self._commit("create")
        logger.info("Created %s %s", self.resource, entity.id)
        return entity

    async def find(self, entity_id: Any) -> Optional[ModelT]:
        pk = self.parse_id(entity_id)
        async with self._store("get"):
            return await self.session.get(self.model, pk)

    async def get(self, entity_id: Any) -> ModelT:
        entity = await self.find(entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))
        return entity

    async def list(self, options: QueryOptions) -> List[ModelT]:
        """
        One SELECT with the options' filters, sort, limit and offset.

        The sort field is looked up among the table's columns. A name that
        matches none adds no ORDER BY, so rows come back in store order.
        """
        stmt = select(self.model)
        for key, value in options.filters.items():
            column = self.column(key)
            if column is not None:
                stmt = stmt.where(column == value)

        if options.sort is not None:
            column = self.column(options.sort.field)
            if column is not None:
                stmt = stmt.order_by(column.desc() if options.sort.descending else column.asc())
            else:
                logger.debug("Sort field %r matches no %s column", options.sort.field, self.resource)

        if options.limit is not None:
            stmt = stmt.limit(options.limit)
        if options.offset:
            stmt = stmt.offset(options.offset)

        async with self._store("list"):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def update(self, entity_id: Any, values: Mapping[str, Any]) -> ModelT:
        entity = await self.get(entity_id)

        changes = self.writable(values)
        self.validate(changes, partial=True)
        changes = self.prepare(changes)
        await self.check_unique(changes, exclude_id=entity.id)

        for key, value in changes.items():
            setattr(entity, key, value)
        await self._commit("update")
        logger.info("Updated %s %s (%s)", self.resource, entity.id, ", ".join(sorted(changes)) or "no changes")
        return entity

    async def remove(self, entity_id: Any) -> ModelT:
        entity = await self.get(entity_id)
        async with self._store("delete"):
            await self.session.delete(entity)
        await self._commit("delete")
        logger.info("Deleted %s %s", self.resource, entity.id)
        return entity
