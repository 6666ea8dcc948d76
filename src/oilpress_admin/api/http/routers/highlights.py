"""Best-seller slots and product of the day."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field
from sqlmodel import Session

from src.oilpress_admin.api.http.deps import get_db_session
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.catalog import BestSellers, ItemReference, ProductOfTheDay
from src.oilpress_admin.entities.catalog.highlight import (
    BEST_SELLER_SLOTS,
    BEST_SELLERS_ID,
    PRODUCT_OF_THE_DAY_ID,
)
from src.oilpress_admin.entities.core._base import DocumentRepository, Entity

router = APIRouter()


class BestSellersUpdate(BaseModel):
    slots: list[ItemReference | None] = Field(max_length=BEST_SELLER_SLOTS)


class ProductOfTheDayUpdate(BaseModel):
    item: ItemReference


def _display_name(record: dict) -> str:
    return record.get("product_name") or record.get("productName") or record.get("category") or ""


def _resolve(reference: ItemReference, session: Session) -> ItemReference:
    """Check that ``reference`` points at a stored item and fill in its name."""
    repository = DocumentRepository(session, reference.source_collection, Entity)
    record = repository.get_raw(reference.item_id)
    if record is None:
        raise HTTPException(
            status_code=422,
            detail=f"Item {reference.item_id} not found in {reference.source_collection}",
        )
    return reference.model_copy(update={"name": reference.name or _display_name(record)})


def _highlights(session: Session, model: type[Entity]) -> DocumentRepository:
    return DocumentRepository(session, collections.HIGHLIGHTS, model)


@router.get("/candidates")
def list_candidates(session: Session = Depends(get_db_session)) -> list[dict[str, str]]:
    """Every product, combo and gift that can be highlighted."""
    candidates = []
    for source in collections.HIGHLIGHT_SOURCES:
        for record in DocumentRepository(session, source, Entity).list_raw():
            candidates.append(
                {"id": record["id"], "name": _display_name(record), "source_collection": source}
            )
    return candidates


@router.get("/best-sellers", response_model=BestSellers)
def get_best_sellers(session: Session = Depends(get_db_session)) -> BestSellers:
    return _highlights(session, BestSellers).get(BEST_SELLERS_ID) or BestSellers()


@router.put("/best-sellers", response_model=BestSellers)
def put_best_sellers(
    update: BestSellersUpdate, session: Session = Depends(get_db_session)
) -> BestSellers:
    slots = [_resolve(slot, session) if slot is not None else None for slot in update.slots]
    saved = _highlights(session, BestSellers).put(BestSellers(slots=slots))
    session.commit()
    logger.info("Best sellers updated: {}", [s.item_id for s in saved.references()])
    return saved


@router.get("/product-of-the-day", response_model=ProductOfTheDay)
def get_product_of_the_day(session: Session = Depends(get_db_session)) -> ProductOfTheDay:
    current = _highlights(session, ProductOfTheDay).get(PRODUCT_OF_THE_DAY_ID)
    if current is None:
        raise HTTPException(status_code=404, detail="Product of the day not set")
    return current


@router.put("/product-of-the-day", response_model=ProductOfTheDay)
def put_product_of_the_day(
    update: ProductOfTheDayUpdate, session: Session = Depends(get_db_session)
) -> ProductOfTheDay:
    item = _resolve(update.item, session)
    saved = _highlights(session, ProductOfTheDay).put(ProductOfTheDay(item=item))
    session.commit()
    logger.info("Product of the day set to {} ({})", item.item_id, item.source_collection)
    return saved
