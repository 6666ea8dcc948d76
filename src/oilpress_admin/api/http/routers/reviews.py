"""Review moderation router."""

from fastapi import Depends, HTTPException
from loguru import logger
from sqlmodel import Session

from src.oilpress_admin.api.http.deps import get_db_session
from src.oilpress_admin.api.http.routers.resource import Resource, build_router
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.inbox import Review

REVIEWS = Resource(
    collection=collections.REVIEWS,
    model=Review,
    label="Review",
    search_fields=("name", "email", "description"),
    filter_fields=("approved", "product_id", "rating"),
    read_only=True,
)

router = build_router(REVIEWS)


def _set_approval(item_id: str, approved: bool, session: Session) -> Review:
    try:
        review = REVIEWS.repository(session).update(item_id, {"approved": approved})
    except ValueError as e:
        raise HTTPException(status_code=404, detail="Review not found") from e
    session.commit()
    logger.info("Review {} {}", item_id, "approved" if approved else "disapproved")
    return review


@router.post("/{item_id}/approve", response_model=Review)
def approve_review(item_id: str, session: Session = Depends(get_db_session)) -> Review:
    return _set_approval(item_id, True, session)


@router.post("/{item_id}/disapprove", response_model=Review)
def disapprove_review(item_id: str, session: Session = Depends(get_db_session)) -> Review:
    return _set_approval(item_id, False, session)


@router.delete("/{item_id}")
def delete_review(item_id: str, session: Session = Depends(get_db_session)) -> dict[str, str]:
    if not REVIEWS.repository(session).delete(item_id):
        raise HTTPException(status_code=404, detail="Review not found")
    session.commit()
    logger.info("Review deleted: {}", item_id)
    return {"message": "Review deleted successfully"}
