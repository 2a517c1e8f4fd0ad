import logging
from typing import Any, Dict, List, Optional

from .models import CartItem, Product, User

# This file holds all the in-memory data stores.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Wireless Headphones", "price": 79.99, "description": "Bluetooth over-ear headphones with noise cancellation", "category": "Electronics"},
    {"id": 2, "name": "Running Shoes", "price": 129.99, "description": "Lightweight running shoes with cushioned sole", "category": "Sports"},
    {"id": 3, "name": "Coffee Maker", "price": 49.99, "description": "12-cup programmable coffee maker", "category": "Kitchen"},
    {"id": 4, "name": "Backpack", "price": 59.99, "description": "Water-resistant laptop backpack", "category": "Accessories"},
    {"id": 5, "name": "Wireless Mouse", "price": 29.99, "description": "Ergonomic wireless mouse with USB receiver", "category": "Electronics"},
]

# keyed by email
USERS: Dict[str, User] = {}
# keyed by user email, lines kept in insertion order
CARTS: Dict[str, List[CartItem]] = {}
PRODUCTS: List[Product] = []


def init_store() -> None:
    """Drop users and carts and reload the seed catalog."""
    USERS.clear()
    CARTS.clear()
    PRODUCTS[:] = [Product(**p) for p in SEED_PRODUCTS]
    logger.info("Store initialised with %d products", len(PRODUCTS))


def get_product(product_id: int) -> Optional[Product]:
    for p in PRODUCTS:
        if p.id == product_id:
            return p
    return None


def get_user_by_token(token: str) -> Optional[User]:
    for u in USERS.values():
        if u.token == token:
            return u
    return None
