"""
Database Schemas for the Storefront

Each Pydantic model represents a MongoDB collection (or a document embedded in
one). Collection name is the lowercase of the class name: Product -> "product",
User -> "user", Order -> "order".

Fields are stored in snake_case; the storefront frontend sends camelCase, so
every model accepts both spellings.
"""
from typing import List, Literal, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


def normalize_size(value: Optional[str]) -> Optional[str]:
    """Blank or missing size labels mean "no variant"."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(CamelModel):
    name: str = Field(..., max_length=100)
    description: str
    price: float = Field(..., ge=0)
    original_price: Optional[float] = None
    in_stock: bool = True
    category: Literal["men-clothing", "women-clothing", "other"]
    image_url: str
    rating: float = Field(0, ge=0, le=5)
    sizes: List[str] = []


class Address(CamelModel):
    """Embedded in User.addresses; the stored copy also carries an `_id`."""
    full_name: str
    street: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    is_default: bool = False


class CartItem(CamelModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    product: ObjectId
    quantity: int = Field(1, ge=1)
    size: Optional[str] = None

    @field_validator("size")
    @classmethod
    def blank_size_is_none(cls, value):
        return normalize_size(value)


class WishlistItem(CamelModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    product: ObjectId
    size: Optional[str] = None

    @field_validator("size")
    @classmethod
    def blank_size_is_none(cls, value):
        return normalize_size(value)


class User(CamelModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    email: EmailStr
    password_hash: str
    addresses: List[dict] = []
    cart: List[dict] = []
    wishlist: List[dict] = []
    order_history: List[ObjectId] = []


class ShippingAddress(CamelModel):
    """Value copy of an Address taken at checkout."""
    full_name: str
    street: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None


class OrderItem(CamelModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    product: ObjectId
    name: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    size: Optional[str] = None


class Order(CamelModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: ObjectId
    items: List[OrderItem]
    shipping_address: ShippingAddress
    total_amount: float = Field(0, ge=0)
    order_status: Literal["Processing", "Shipped", "Delivered", "Cancelled"] = "Processing"
