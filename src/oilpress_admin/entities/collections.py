"""Names of the stored document collections."""

PRODUCTS = "products"
COMBO_PRODUCTS = "comboProducts"
GIFT_PRODUCTS = "giftProducts"
BLOGS = "blogs"
PODCASTS = "podcasts"
TESTIMONIALS = "testimonials"
FAQS = "faqs"
BANNERS = "banners"
SLIDER = "slider"
HIGHLIGHTS = "highlights"
BULK_ORDERS = "bulkOrders"
CONTACT_MESSAGES = "contactMessages"
USERS = "users"
ORDERS = "orders"
REVIEWS = "reviews"

# Collections that can be referenced from the highlight slots
HIGHLIGHT_SOURCES = (PRODUCTS, COMBO_PRODUCTS, GIFT_PRODUCTS)

ALL = (
    PRODUCTS,
    COMBO_PRODUCTS,
    GIFT_PRODUCTS,
    BLOGS,
    PODCASTS,
    TESTIMONIALS,
    FAQS,
    BANNERS,
    SLIDER,
    HIGHLIGHTS,
    BULK_ORDERS,
    CONTACT_MESSAGES,
    USERS,
    ORDERS,
    REVIEWS,
)
