import uuid
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

import sqlalchemy as sa
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as PydanticField
from sqlalchemy import JSON, Column, func
from sqlmodel import Field, Session, SQLModel, select


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = PydanticField(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=_utcnow)
    updated_at: datetime = PydanticField(default_factory=_utcnow)


class DocumentTable(SQLModel, table=True):
    """A schemaless document stored in a named collection."""

    __tablename__ = "documents"

    id: str = Field(
        primary_key=True,
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the document",
    )
    collection: str = Field(index=True, nullable=False)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )


E = TypeVar("E", bound=Entity)

_ROW_FIELDS = ("id", "created_at", "updated_at")


class DocumentRepository(Generic[E]):
    """Data-access layer for one collection of ``model`` documents."""

    def __init__(self, session: Session, collection: str, model: type[E]) -> None:
        self._session = session
        self._collection = collection
        self._model = model

    @property
    def collection(self) -> str:
        return self._collection

    def _to_entity(self, row: DocumentTable) -> E:
        return self._model.model_validate(
            {**row.data, "id": row.id, "created_at": row.created_at, "updated_at": row.updated_at}
        )

    @staticmethod
    def _to_data(entity: Entity) -> dict[str, Any]:
        exclude = set(_ROW_FIELDS) | set(type(entity).model_computed_fields)
        return entity.model_dump(mode="json", exclude=exclude)

    def _get_row(self, item_id: str) -> DocumentTable | None:
        row = self._session.get(DocumentTable, item_id)
        if row is None or row.collection != self._collection:
            return None
        return row

    def create(self, entity: E) -> E:
        """Insert ``entity`` as a new document."""
        row = DocumentTable(
            id=entity.id,
            collection=self._collection,
            data=self._to_data(entity),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
        self._session.add(row)
        self._session.flush()
        logger.debug("Created {} document {}", self._collection, row.id)
        return self._to_entity(row)

    def get(self, item_id: str) -> E | None:
        row = self._get_row(item_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_raw(self, item_id: str) -> dict[str, Any] | None:
        row = self._get_row(item_id)
        if row is None:
            return None
        return {**row.data, "id": row.id, "created_at": row.created_at}

    def _ordered_rows(self, limit: int | None = None) -> list[DocumentTable]:
        statement = (
            select(DocumentTable)
            .where(DocumentTable.collection == self._collection)
            .order_by(DocumentTable.created_at.desc(), DocumentTable.id.desc())
        )
        if limit is not None:
            statement = statement.limit(limit)
        return list(self._session.exec(statement).all())

    def list_all(self, limit: int | None = None) -> list[E]:
        """Return documents newest first, skipping any that no longer validate."""
        entities = []
        for row in self._ordered_rows(limit):
            try:
                entities.append(self._to_entity(row))
            except ValidationError as e:
                logger.warning(
                    "Skipping {} document {}: {} validation error(s)",
                    self._collection,
                    row.id,
                    e.error_count(),
                )
        return entities

    def list_raw(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Return stored payloads newest first, without model validation."""
        return [
            {**row.data, "id": row.id, "created_at": row.created_at}
            for row in self._ordered_rows(limit)
        ]

    def update(self, item_id: str, changes: dict[str, Any]) -> E:
        """Merge ``changes`` into a stored document and revalidate it.

        Raises:
            ValueError: If no document with ``item_id`` exists in the collection.
        """
        row = self._get_row(item_id)
        if row is None:
            raise ValueError(f"{self._collection} document {item_id} not found")

        current = self._to_entity(row)
        merged = {**current.model_dump(), **changes, "id": row.id, "created_at": row.created_at}
        merged["updated_at"] = _utcnow()
        entity = self._model.model_validate(merged)

        row.data = self._to_data(entity)
        row.updated_at = entity.updated_at
        self._session.add(row)
        self._session.flush()
        logger.debug("Updated {} document {}", self._collection, row.id)
        return self._to_entity(row)

    def put(self, entity: E) -> E:
        """Write ``entity`` under its own id, replacing any existing document."""
        row = self._get_row(entity.id)
        if row is None:
            return self.create(entity)

        entity.updated_at = _utcnow()
        row.data = self._to_data(entity)
        row.updated_at = entity.updated_at
        self._session.add(row)
        self._session.flush()
        logger.debug("Replaced {} document {}", self._collection, row.id)
        return self._to_entity(row)

    def delete(self, item_id: str) -> bool:
        row = self._get_row(item_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        logger.debug("Deleted {} document {}", self._collection, item_id)
        return True

    def count(self) -> int:
        statement = (
            select(func.count())
            .select_from(DocumentTable)
            .where(DocumentTable.collection == self._collection)
        )
        return int(self._session.exec(statement).one())
