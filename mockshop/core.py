import base64
import binascii
import time
from typing import Iterable, Optional, Tuple

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from .models import CartItem


class CredentialsIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AddToCartIn(BaseModel):
    # strict: JSON true or "1" must not pass as a product id or quantity
    model_config = ConfigDict(strict=True, populate_by_name=True)

    product_id: Optional[int] = Field(None, alias="productId")
    quantity: Optional[int] = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_token(email: str) -> str:
    """
    Encode the email and issue time as an opaque bearer token.

    Not a secret: two calls within the same millisecond produce the same
    token, which is acceptable for a test fixture.
    """
    raw = f"{email}:{_now_ms()}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_token(token: str) -> Optional[Tuple[str, int]]:
    """Return (email, issued_at_ms) for a token made by generate_token, else None."""
    try:
        raw = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError):
        return None
    email, sep, stamp = raw.rpartition(":")
    if not sep or not email or not stamp.isdigit():
        return None
    return email, int(stamp)


def wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")


def cart_total(cart: Iterable[CartItem]) -> float:
    total = sum(item.price * item.quantity for item in cart)
    return round(total, 2)


def serialize_cart(cart: Iterable[CartItem]) -> list:
    return [item.model_dump(by_alias=True) for item in cart]
