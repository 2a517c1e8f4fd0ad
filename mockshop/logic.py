import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException

from .core import AddToCartIn, CredentialsIn, cart_total, generate_token, serialize_cart
from .database import CARTS, PRODUCTS, USERS, get_product, init_store
from .models import CartItem, Product, User

# This file contains the core logic for all API endpoints.

logger = logging.getLogger(__name__)


def _require_credentials(payload: CredentialsIn) -> None:
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")


# Auth endpoints
async def register_logic(payload: CredentialsIn) -> Dict[str, Any]:
    _require_credentials(payload)
    if payload.email in USERS:
        raise HTTPException(status_code=409, detail="User already exists")
    token = generate_token(payload.email)
    USERS[payload.email] = User(email=payload.email, password=payload.password, token=token)
    logger.info("Registered %s", payload.email)
    return {"message": "User registered successfully", "token": token, "email": payload.email}


async def login_logic(payload: CredentialsIn) -> Dict[str, Any]:
    _require_credentials(payload)
    user = USERS.get(payload.email)
    if user is None or user.password != payload.password:
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    user.token = generate_token(user.email)
    logger.info("Login for %s", user.email)
    return {"message": "Login successful", "token": user.token, "email": user.email}


# Product endpoints
async def list_products_logic() -> Dict[str, Any]:
    return {"products": [p.model_dump() for p in PRODUCTS]}


async def search_products_logic(q: Optional[str] = None) -> Dict[str, Any]:
    term = (q or "").lower()
    results = [
        p for p in PRODUCTS
        if term in p.name.lower()
        or term in p.description.lower()
        or term in p.category.lower()
    ]
    return {"products": [p.model_dump() for p in results], "query": term}


def find_product(product_id: str) -> Optional[Product]:
    """Look up a product by its path segment; non-numeric ids simply miss."""
    try:
        pid = int(product_id)
    except ValueError:
        return None
    return get_product(pid)


async def get_product_logic(product_id: str) -> Dict[str, Any]:
    p = find_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"product": p.model_dump()}


# Cart endpoints
async def view_cart_logic(user: User) -> Dict[str, Any]:
    cart = CARTS.get(user.email, [])
    return {"cart": serialize_cart(cart), "total": cart_total(cart)}


async def cart_add_logic(user: User, payload: AddToCartIn) -> Dict[str, Any]:
    if not payload.product_id or not payload.quantity or payload.quantity < 1:
        raise HTTPException(status_code=400, detail="productId and quantity (>= 1) are required")

    product = get_product(payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    cart = CARTS.setdefault(user.email, [])
    existing = next((item for item in cart if item.product_id == product.id), None)
    if existing:
        existing.quantity += payload.quantity
    else:
        cart.append(CartItem(
            product_id=product.id,
            name=product.name,
            price=product.price,
            quantity=payload.quantity,
        ))
    logger.info("Added %d x product %d to cart of %s", payload.quantity, product.id, user.email)
    return {"message": "Item added to cart", "cart": serialize_cart(cart)}


# Utility
async def reset_logic() -> Dict[str, str]:
    init_store()
    return {"status": "reset"}
