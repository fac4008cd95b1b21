# Import every model so relationship() targets resolve and create_all sees all tables
from freshbox.db.session import Base  # noqa: F401
from freshbox.models.catalog import BoxType, Product  # noqa: F401
from freshbox.models.customer import Customer  # noqa: F401
from freshbox.models.order import Order, OrderItem  # noqa: F401
from freshbox.models.contact import ContactMessage  # noqa: F401
