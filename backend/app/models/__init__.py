from app.models.user import User
from app.models.category import Category
from app.models.item import Item
from app.models.customer import Customer
from app.models.invoice import Invoice

__all__ = [
    "User",
    "Category",
    "Item",
    "Customer",
    "Invoice",
]
