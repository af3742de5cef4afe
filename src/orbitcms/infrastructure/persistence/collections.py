"""SQLAlchemy-backed document collections.

One class per collection, all sharing the generic SqlDocumentCollection machinery.
Each public method opens its own session scope and is therefore atomic on its own.
"""

import dataclasses
import json
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, String, cast, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import defer

from orbitcms.domain.entities import Contact, Page, Playlist, Track, utc_now
from orbitcms.domain.exceptions import DuplicateKeyError
from orbitcms.domain.ports import IDocumentCollection, QuerySpec, SortDirection, UpdateSpec
from orbitcms.infrastructure.persistence.database import Database
from orbitcms.infrastructure.persistence.models import (
    Base,
    ContactModel,
    PageModel,
    PlaylistModel,
    TrackModel,
    ensure_utc_aware,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlDocumentCollection(IDocumentCollection[E], Generic[E]):
    """Generic document collection over one ORM model.

    Subclasses only name the model, the entity dataclass and the collection name.
    """

    model: type[Base]
    entity: type[E]
    name: str
    # Fields backed by a unique index, reported back on DuplicateKeyError
    unique_fields: tuple[str, ...] = ()

    def __init__(self, db: Database) -> None:
        self._db = db

    # --- mapping ---------------------------------------------------------------

    def _to_entity(self, row: Any, excluded: Sequence[str] = ()) -> E:
        values: dict[str, Any] = {}
        for f in dataclasses.fields(self.entity):  # type: ignore[arg-type]
            if f.name in excluded:
                continue
            value = getattr(row, f.name)
            if isinstance(value, datetime):
                value = ensure_utc_aware(value)
            elif isinstance(value, list):
                value = list(value)
            values[f.name] = value
        return self.entity(**values)

    def _to_row(self, document: E) -> Any:
        values = {
            f.name: getattr(document, f.name)
            for f in dataclasses.fields(self.entity)  # type: ignore[arg-type]
        }
        return self.model(**values)

    def _column(self, field_name: str) -> Any:
        column = getattr(self.model, field_name, None)
        if column is None:
            raise ValueError(f"Unknown field '{field_name}' for collection {self.name}")
        return column

    # --- query building --------------------------------------------------------

    def _conditions(self, query: QuerySpec) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        for field_name, value in query.equals.items():
            conditions.append(self._column(field_name) == value)
        for field_name, value in query.not_equals.items():
            conditions.append(self._column(field_name) != value)
        # Array membership: JSON arrays are matched on their serialized member,
        # quotes included, so "jazz" never matches "jazz-fusion".
        for field_name, member in query.contains.items():
            pattern = f"%{_escape_like(json.dumps(member))}%"
            conditions.append(
                cast(self._column(field_name), String).like(pattern, escape="\\")
            )
        if query.search and query.search_fields:
            pattern = f"%{_escape_like(query.search)}%"
            conditions.append(
                or_(
                    *(
                        self._column(field_name).ilike(pattern, escape="\\")
                        for field_name in query.search_fields
                    )
                )
            )
        return conditions

    def _select(self, query: QuerySpec) -> Select[Any]:
        stmt = select(self.model).where(*self._conditions(query))
        if query.exclude_fields:
            stmt = stmt.options(
                *(defer(self._column(name)) for name in query.exclude_fields)
            )
        order_by = []
        for field_name, direction in query.sort:
            column = self._column(field_name)
            order_by.append(column.desc() if direction == SortDirection.DESC else column.asc())
        # Stable order for equal timestamps
        order_by.append(self._column("id").desc())
        stmt = stmt.order_by(*order_by)
        if query.skip:
            stmt = stmt.offset(query.skip)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)
        return stmt

    def _duplicate_key(self, exc: IntegrityError) -> DuplicateKeyError | None:
        """Map a unique violation on one of `unique_fields`; None for any other violation."""
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        key = next((name for name in self.unique_fields if name in detail), None)
        if key is None:
            return None
        return DuplicateKeyError(self.name, key)

    # --- operations ------------------------------------------------------------

    async def insert(self, document: E) -> E:
        async with self._db.session_scope() as session:
            row = self._to_row(document)
            session.add(row)
            try:
                await session.flush()
            except IntegrityError as e:
                duplicate = self._duplicate_key(e)
                if duplicate is None:
                    raise
                raise duplicate from e
            return self._to_entity(row)

    async def find_by_id(self, document_id: str) -> E | None:
        async with self._db.session_scope() as session:
            row = await session.get(self.model, document_id)
            return self._to_entity(row) if row is not None else None

    async def find_by_ids(self, document_ids: Sequence[str]) -> list[E]:
        wanted = list(dict.fromkeys(document_ids))
        if not wanted:
            return []
        async with self._db.session_scope() as session:
            result = await session.execute(
                select(self.model).where(self._column("id").in_(wanted))
            )
            by_id = {row.id: self._to_entity(row) for row in result.scalars()}
        return [by_id[doc_id] for doc_id in wanted if doc_id in by_id]

    async def find_one(self, query: QuerySpec) -> E | None:
        matches = await self.find(dataclasses.replace(query, skip=0, limit=1))
        return matches[0] if matches else None

    async def find(self, query: QuerySpec) -> list[E]:
        async with self._db.session_scope() as session:
            result = await session.execute(self._select(query))
            return [self._to_entity(row, query.exclude_fields) for row in result.scalars()]

    async def count(self, query: QuerySpec) -> int:
        async with self._db.session_scope() as session:
            stmt = select(func.count()).select_from(self.model).where(*self._conditions(query))
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def update_by_id(self, document_id: str, update: UpdateSpec) -> E | None:
        async with self._db.session_scope() as session:
            row = await session.get(self.model, document_id, with_for_update=True)
            if row is None:
                return None
            if update.is_empty():
                return self._to_entity(row)
            for field_name, value in update.set.items():
                self._column(field_name)  # rejects unknown fields
                setattr(row, field_name, value)
            # JSON columns only notice reassignment, so always build a new list
            for field_name, values in update.add_to_set.items():
                current = list(getattr(row, field_name) or [])
                for value in values:
                    if value not in current:
                        current.append(value)
                setattr(row, field_name, current)
            for field_name, values in update.pull.items():
                removed = set(values)
                setattr(
                    row,
                    field_name,
                    [value for value in getattr(row, field_name) or [] if value not in removed],
                )
            row.updated_at = utc_now()
            try:
                await session.flush()
            except IntegrityError as e:
                duplicate = self._duplicate_key(e)
                if duplicate is None:
                    raise
                raise duplicate from e
            return self._to_entity(row)

    async def delete_by_id(self, document_id: str) -> E | None:
        async with self._db.session_scope() as session:
            row = await session.get(self.model, document_id)
            if row is None:
                return None
            document = self._to_entity(row)
            await session.delete(row)
            return document


class TrackCollection(SqlDocumentCollection[Track]):
    model = TrackModel
    entity = Track
    name = "tracks"


class PlaylistCollection(SqlDocumentCollection[Playlist]):
    model = PlaylistModel
    entity = Playlist
    name = "playlists"


class PageCollection(SqlDocumentCollection[Page]):
    model = PageModel
    entity = Page
    name = "pages"
    unique_fields = ("slug",)


class ContactCollection(SqlDocumentCollection[Contact]):
    model = ContactModel
    entity = Contact
    name = "contacts"


__all__ = [
    "ContactCollection",
    "PageCollection",
    "PlaylistCollection",
    "SqlDocumentCollection",
    "TrackCollection",
]
