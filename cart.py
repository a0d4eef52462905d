"""
Shopping cart reconciliation.

A cart line is identified by (product, size); size None ("no variant") is a
distinct line from any labelled size of the same product. Every operation
loads the user, mutates the cart in memory, saves the user and returns the
cart with product details attached.
"""
from typing import List, Optional

from bson import ObjectId
from pymongo.database import Database

from catalog import product_exists, resolve_products
from database import parse_object_id
from errors import InvalidArgument, NotFound
from schemas import CartItem, normalize_size
from users import load_user, save_user

ACTIONS = ("increment", "decrement")


def require_product_id(product_id) -> ObjectId:
    if not product_id:
        raise InvalidArgument("Product ID is required.")
    oid = parse_object_id(product_id)
    if oid is None:
        raise InvalidArgument("Invalid product ID format.")
    return oid


def same_line(item: dict, product: ObjectId, size: Optional[str]) -> bool:
    return item["product"] == product and item.get("size") == size


def resolve_cart(db: Database, user: dict) -> List[dict]:
    products = resolve_products(db, [item["product"] for item in user["cart"]])
    return [
        {
            "product": products.get(item["product"]),
            "quantity": item["quantity"],
            "size": item.get("size"),
        }
        for item in user["cart"]
    ]


def get_cart(db: Database, user_id) -> List[dict]:
    return resolve_cart(db, load_user(db, user_id))


def add_to_cart(db: Database, user_id, product_id, size: Optional[str] = None) -> List[dict]:
    """Increment the matching (product, size) line, or append a new one with quantity 1."""
    product = require_product_id(product_id)
    size = normalize_size(size)
    user = load_user(db, user_id)
    if not product_exists(db, product):
        raise NotFound("Product not found")

    for item in user["cart"]:
        if same_line(item, product, size):
            item["quantity"] += 1
            break
    else:
        user["cart"].append(CartItem(product=product, quantity=1, size=size).model_dump())

    save_user(db, user)
    return resolve_cart(db, user)


def adjust_quantity(db: Database, user_id, product_id, action: str, size: Optional[str] = None) -> List[dict]:
    """Step a line's quantity by one; decrementing a quantity-1 line removes it."""
    product = require_product_id(product_id)
    size = normalize_size(size)
    user = load_user(db, user_id)

    item = next((i for i in user["cart"] if same_line(i, product, size)), None)
    if item is None:
        raise NotFound("Item not found in cart.")
    if action not in ACTIONS:
        raise InvalidArgument("Invalid action provided.")

    if action == "increment":
        item["quantity"] += 1
    elif item["quantity"] > 1:
        item["quantity"] -= 1
    else:
        user["cart"] = [i for i in user["cart"] if not same_line(i, product, size)]

    save_user(db, user)
    return resolve_cart(db, user)


def remove_from_cart(db: Database, user_id, product_id, size: Optional[str] = None,
                     match_size: bool = False) -> List[dict]:
    """Remove lines of a product.

    With match_size False every size of the product goes; with match_size True
    only lines whose size equals `size` (None meaning the unsized line) go.
    """
    product = require_product_id(product_id)
    size = normalize_size(size)
    user = load_user(db, user_id)

    if match_size:
        user["cart"] = [i for i in user["cart"] if not same_line(i, product, size)]
    else:
        user["cart"] = [i for i in user["cart"] if i["product"] != product]

    save_user(db, user)
    return resolve_cart(db, user)


def clear_cart(db: Database, user_id) -> List[dict]:
    user = load_user(db, user_id)
    user["cart"] = []
    save_user(db, user)
    return []
