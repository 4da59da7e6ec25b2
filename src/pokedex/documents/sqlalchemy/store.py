"""SQLAlchemy implementation of the DocumentStore."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from typing_extensions import override

from pokedex.documents.exceptions import DatabaseError, PaginationParameterError
from pokedex.documents.identifiers import new_document_id
from pokedex.documents.protocols import (
    DESCENDING,
    ID_FIELD,
    VERSION_FIELD,
    DeleteResult,
    Document,
    DocumentStore,
    Filter,
    SortSpec,
    UpdateResult,
)
from pokedex.documents.sqlalchemy.mapper import SqlAlchemyExceptionMapper

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.orm import DeclarativeBase


class SqlAlchemy(DocumentStore):
    """SQLAlchemy implementation of the DocumentStore.

    Each document is a row of the table behind ``document_model``; its mapped
    columns are the document fields. The model must declare an ``id`` string
    primary key and may declare an integer ``version`` column.

    Every operation runs in its own AsyncSession taken from the session
    factory, so a single store can serve concurrent callers. Writes are
    committed immediately and rolled back on failure.

    Attributes:
        session_factory: Factory producing the AsyncSession of each operation.
        document_model: The declarative model class of the collection.
        collection: Name of the collection (the model's table name).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        document_model: type[DeclarativeBase],
    ) -> None:
        """Initialize the SQLAlchemy document store.

        Args:
            session_factory: An async_sessionmaker bound to the target database.
            document_model: The declarative model class for the collection.
        """
        self.session_factory = session_factory
        self.document_model = document_model
        self.collection = document_model.__tablename__
        self._fields = [attr.key for attr in inspect(document_model).column_attrs]
        self._exception_mapper = SqlAlchemyExceptionMapper()

    def _to_document(self, row: Any, exclude: Sequence[str] = ()) -> Document:
        return {field: getattr(row, field) for field in self._fields if field not in exclude}

    def _ensure_known_fields(self, fields: Mapping[str, Any]) -> None:
        """Ensure every field maps to a column of the collection.

        Raises:
            DatabaseError: If a field has no matching column.
        """
        unknown = sorted(set(fields) - set(self._fields))
        if unknown:
            msg = f"Unknown fields for collection {self.collection}: {', '.join(unknown)}"
            raise DatabaseError(msg)

    def _select(self, filter: Filter | None) -> Select[Any]:  # noqa: A002
        self._ensure_known_fields(filter or {})
        return select(self.document_model).filter_by(**(filter or {}))

    async def _first(self, session: AsyncSession, filter: Filter) -> Any:  # noqa: A002
        result = await session.execute(self._select(filter).limit(1))
        return result.scalars().first()

    async def _commit(self, session: AsyncSession, document: Mapping[str, Any]) -> None:
        """Commit the session with error handling.

        Args:
            session: The session holding the pending write
            document: The fields being written, for error messages

        Raises:
            DatabaseError: If commit fails (mapped from any infrastructure exception)
        """
        try:
            await session.commit()
        except Exception as e:
            await session.rollback()

            # The mapper always returns a DatabaseError (specific or generic)
            domain_error = self._exception_mapper.map(
                error=e, collection=self.collection, document=document
            )
            raise domain_error from e

    def _map_error(self, error: SQLAlchemyError) -> DatabaseError:
        return self._exception_mapper.map(error=error, collection=self.collection)

    @override
    async def find(
        self,
        filter: Filter | None = None,  # noqa: A002
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        exclude: Sequence[str] = (),
    ) -> list[Document]:
        """Retrieve documents matching an equality filter.

        Raises:
            PaginationParameterError: If skip or limit is negative.
        """
        if limit is not None and limit < 0:
            msg = "limit"
            raise PaginationParameterError(msg, limit)
        if skip < 0:
            msg = "skip"
            raise PaginationParameterError(msg, skip)

        query = self._select(filter)
        for field, direction in sort or ():
            self._ensure_known_fields({field: None})
            column = getattr(self.document_model, field)
            query = query.order_by(column.desc() if direction == DESCENDING else column.asc())
        query = query.offset(skip).limit(limit)

        try:
            async with self.session_factory() as session:
                rows = (await session.execute(query)).scalars().all()
                return [self._to_document(row, exclude) for row in rows]
        except SQLAlchemyError as e:
            raise self._map_error(e) from e

    @override
    async def find_one(self, filter: Filter) -> Document | None:  # noqa: A002
        try:
            async with self.session_factory() as session:
                row = await self._first(session, filter)
                return self._to_document(row) if row is not None else None
        except SQLAlchemyError as e:
            raise self._map_error(e) from e

    @override
    async def find_by_id(self, document_id: str) -> Document | None:
        try:
            async with self.session_factory() as session:
                row = await session.get(self.document_model, document_id)
                return self._to_document(row) if row is not None else None
        except SQLAlchemyError as e:
            raise self._map_error(e) from e

    @override
    async def create(self, document: Mapping[str, Any]) -> Document:
        """Insert a new row with a freshly assigned identifier.

        Raises:
            DuplicateDocumentError: If a unique column collides with an existing row.
        """
        fields = dict(document)
        fields[ID_FIELD] = new_document_id()
        if VERSION_FIELD in self._fields:
            fields[VERSION_FIELD] = 0
        self._ensure_known_fields(fields)

        async with self.session_factory() as session:
            row = self.document_model(**fields)
            session.add(row)
            await self._commit(session, fields)
            try:
                await session.refresh(row)
            except SQLAlchemyError as e:
                raise self._map_error(e) from e
            return self._to_document(row)

    @override
    async def update_one(self, filter: Filter, changes: Mapping[str, Any]) -> UpdateResult:  # noqa: A002
        """Apply changes to the first row matching the filter.

        Raises:
            DuplicateDocumentError: If a change collides with another row's unique column.
        """
        self._ensure_known_fields(changes)
        async with self.session_factory() as session:
            try:
                row = await self._first(session, filter)
            except SQLAlchemyError as e:
                raise self._map_error(e) from e
            if row is None:
                return UpdateResult(matched_count=0, modified_count=0)

            modified = False
            for field, value in changes.items():
                if getattr(row, field) != value:
                    setattr(row, field, value)
                    modified = True
            await self._commit(session, changes)
            return UpdateResult(matched_count=1, modified_count=int(modified))

    @override
    async def delete_one(self, filter: Filter) -> DeleteResult:  # noqa: A002
        async with self.session_factory() as session:
            try:
                row = await self._first(session, filter)
            except SQLAlchemyError as e:
                raise self._map_error(e) from e
            if row is None:
                return DeleteResult(deleted_count=0)

            await session.delete(row)
            await self._commit(session, {ID_FIELD: getattr(row, ID_FIELD)})
            return DeleteResult(deleted_count=1)
