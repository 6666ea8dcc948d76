"""Dashboard home: recent content and collection sizes."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from src.oilpress_admin.api.http.deps import get_db_session
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.content import Banner, Faq, Testimonial
from src.oilpress_admin.entities.core._base import DocumentRepository, Entity

router = APIRouter()

RECENT_LIMIT = 3


@router.get("/overview")
def overview(session: Session = Depends(get_db_session)) -> dict:
    """Latest testimonials, FAQs and banners plus a document count per collection."""
    recent = {
        "testimonials": DocumentRepository(session, collections.TESTIMONIALS, Testimonial),
        "faqs": DocumentRepository(session, collections.FAQS, Faq),
        "banners": DocumentRepository(session, collections.BANNERS, Banner),
    }
    counts = {
        name: DocumentRepository(session, name, Entity).count() for name in collections.ALL
    }
    return {
        **{key: repo.list_all(limit=RECENT_LIMIT) for key, repo in recent.items()},
        "counts": counts,
    }
