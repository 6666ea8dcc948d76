"""Routers for storefront content: blogs, podcasts, testimonials and more."""

from src.oilpress_admin.api.http.routers.resource import Resource, build_router
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.content import (
    Banner,
    Blog,
    Faq,
    Podcast,
    SliderText,
    Testimonial,
)

BLOGS = Resource(
    collection=collections.BLOGS,
    model=Blog,
    label="Blog",
    search_fields=("title", "author", "category"),
    filter_fields=("category", "is_active"),
)

PODCASTS = Resource(
    collection=collections.PODCASTS,
    model=Podcast,
    label="Podcast",
    search_fields=("title", "admin_name", "description"),
    filter_fields=("is_active",),
)

TESTIMONIALS = Resource(
    collection=collections.TESTIMONIALS,
    model=Testimonial,
    label="Testimonial",
    search_fields=("name", "location", "description"),
    filter_fields=("type", "rating", "is_active"),
)

FAQS = Resource(
    collection=collections.FAQS,
    model=Faq,
    label="FAQ",
    search_fields=("question", "answer"),
    filter_fields=("category", "is_active"),
)

BANNERS = Resource(
    collection=collections.BANNERS,
    model=Banner,
    label="Banner",
    search_fields=("title", "description"),
    filter_fields=("is_active",),
)

SLIDER = Resource(
    collection=collections.SLIDER,
    model=SliderText,
    label="Slider text",
    search_fields=("text",),
    filter_fields=("is_active",),
)

blogs_router = build_router(BLOGS)
podcasts_router = build_router(PODCASTS)
testimonials_router = build_router(TESTIMONIALS)
faqs_router = build_router(FAQS)
banners_router = build_router(BANNERS)
slider_router = build_router(SLIDER)
