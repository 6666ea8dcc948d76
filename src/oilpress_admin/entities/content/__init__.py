"""Storefront content entities."""

from .banner import Banner
from .blog import Blog
from .faq import Faq
from .podcast import Podcast
from .slider import SliderText
from .testimonial import Testimonial

__all__ = ["Banner", "Blog", "Faq", "Podcast", "SliderText", "Testimonial"]
