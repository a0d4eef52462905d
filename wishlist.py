"""
Wishlist: a set of liked products, keyed by (product, size) like the cart.
"""
from typing import List, Optional

from pymongo.database import Database

from cart import require_product_id, same_line
from catalog import product_exists, resolve_products
from errors import InvalidArgument, NotFound
from schemas import WishlistItem, normalize_size
from users import load_user, save_user

ADD = "ADD"
REMOVE = "REMOVE"


def resolve_wishlist(db: Database, user: dict) -> List[dict]:
    products = resolve_products(db, [w["product"] for w in user["wishlist"]])
    return [{"product": products.get(w["product"]), "size": w.get("size")} for w in user["wishlist"]]


def get_wishlist(db: Database, user_id) -> List[dict]:
    return resolve_wishlist(db, load_user(db, user_id))


def toggle_wishlist(db: Database, user_id, product_id, action: str = ADD, size: Optional[str] = None,
                    match_size: bool = False) -> List[dict]:
    """ADD is a no-op for an existing (product, size) entry.

    REMOVE drops every entry of the product, or only the entries with the
    given size when match_size is set.
    """
    if action not in (ADD, REMOVE):
        raise InvalidArgument("Action must be ADD or REMOVE.")
    product = require_product_id(product_id)
    size = normalize_size(size)
    user = load_user(db, user_id)

    if action == ADD:
        if any(same_line(w, product, size) for w in user["wishlist"]):
            return resolve_wishlist(db, user)
        if not product_exists(db, product):
            raise NotFound("Product not found")
        user["wishlist"].append(WishlistItem(product=product, size=size).model_dump())
    elif match_size:
        user["wishlist"] = [w for w in user["wishlist"] if not same_line(w, product, size)]
    else:
        user["wishlist"] = [w for w in user["wishlist"] if w["product"] != product]

    save_user(db, user)
    return resolve_wishlist(db, user)


def clear_wishlist(db: Database, user_id) -> List[dict]:
    user = load_user(db, user_id)
    user["wishlist"] = []
    save_user(db, user)
    return []
