# mockshop/models.py
from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    id: int
    name: str
    price: float
    description: str
    category: str


class User(BaseModel):
    email: str
    password: str
    token: str


class CartItem(BaseModel):
    """One cart line. name and price are copied from the product when added."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    name: str
    price: float
    quantity: int = Field(gt=0)
