"""Router factory for collections managed through the dashboard."""

from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from loguru import logger
from pydantic import ValidationError
from sqlmodel import Session

from src.oilpress_admin.api.http.deps import get_db_session, get_list_query
from src.oilpress_admin.core.listing import ListQuery, Page, apply_query
from src.oilpress_admin.entities.core._base import DocumentRepository, Entity

_SERVER_FIELDS = {"id", "created_at", "updated_at"}


@dataclass(frozen=True)
class Resource:
    """How one collection is exposed over HTTP."""

    collection: str
    model: type[Entity]
    label: str
    search_fields: tuple[str, ...] = ()
    filter_fields: tuple[str, ...] = ()
    read_only: bool = False

    def repository(self, session: Session) -> DocumentRepository:
        return DocumentRepository(session, self.collection, self.model)


def validation_error(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=jsonable_encoder(exc.errors(include_url=False, include_context=False)),
    )


def query_with_filters(request: Request, query: ListQuery, filter_fields: tuple[str, ...]) -> ListQuery:
    filters = {
        name: request.query_params[name]
        for name in filter_fields
        if request.query_params.get(name)
    }
    return query.model_copy(update={"filters": filters})


def build_router(resource: Resource) -> APIRouter:
    """Create list/get routes, plus create/update/delete unless read-only."""
    router = APIRouter()
    model = resource.model
    label = resource.label

    @router.get("/", response_model=Page[model], name=f"list_{resource.collection}")
    def list_items(
        request: Request,
        query: ListQuery = Depends(get_list_query),
        session: Session = Depends(get_db_session),
    ):
        """List items newest first, with search, filters and paging."""
        query = query_with_filters(request, query, resource.filter_fields)
        items = resource.repository(session).list_all()
        return apply_query(items, query, resource.search_fields).model_dump()

    @router.get("/{item_id}", response_model=model, name=f"get_{resource.collection}")
    def get_item(item_id: str, session: Session = Depends(get_db_session)):
        try:
            item = resource.repository(session).get(item_id)
        except ValidationError as e:
            raise validation_error(e) from e
        if item is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    if resource.read_only:
        return router

    @router.post("/", response_model=model, status_code=201, name=f"create_{resource.collection}")
    def create_item(
        payload: dict[str, Any] = Body(...),
        session: Session = Depends(get_db_session),
    ):
        """Create an item; identifiers and timestamps are assigned by the server."""
        data = {k: v for k, v in payload.items() if k not in _SERVER_FIELDS}
        try:
            created = resource.repository(session).create(model.model_validate(data))
        except ValidationError as e:
            session.rollback()
            raise validation_error(e) from e
        session.commit()
        logger.info("{} created: {}", label, created.id)
        return created

    @router.put("/{item_id}", response_model=model, name=f"update_{resource.collection}")
    def update_item(
        item_id: str,
        changes: dict[str, Any] = Body(...),
        session: Session = Depends(get_db_session),
    ):
        """Merge the given fields into an existing item."""
        changes = {k: v for k, v in changes.items() if k not in _SERVER_FIELDS}
        try:
            updated = resource.repository(session).update(item_id, changes)
        except ValidationError as e:
            session.rollback()
            raise validation_error(e) from e
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        session.commit()
        logger.info("{} updated: {}", label, item_id)
        return updated

    @router.delete("/{item_id}", name=f"delete_{resource.collection}")
    def delete_item(item_id: str, session: Session = Depends(get_db_session)) -> dict[str, str]:
        deleted = resource.repository(session).delete(item_id)
        if not deleted:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        session.commit()
        logger.info("{} deleted: {}", label, item_id)
        return {"message": f"{label} deleted successfully"}

    return router
