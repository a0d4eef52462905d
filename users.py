"""
User lookup shared by the cart, wishlist, address and checkout modules.
"""
from datetime import datetime, timezone

from pymongo.database import Database

from catalog import resolve_products
from database import parse_object_id, serialize_doc
from errors import NotFound


def load_user(db: Database, user_id) -> dict:
    oid = parse_object_id(user_id)
    user = db["user"].find_one({"_id": oid}) if oid else None
    if not user:
        raise NotFound("User not found.")
    user.setdefault("addresses", [])
    user.setdefault("cart", [])
    # older documents store wishlist entries as bare product ids
    user["wishlist"] = [
        w if isinstance(w, dict) else {"product": w, "size": None} for w in user.get("wishlist", [])
    ]
    user.setdefault("order_history", [])
    return user


def save_user(db: Database, user: dict) -> None:
    """Persist the whole user document. Last write wins."""
    user["updated_at"] = datetime.now(timezone.utc)
    db["user"].replace_one({"_id": user["_id"]}, user)


def get_profile(db: Database, user_id) -> dict:
    """User without the password hash, with wishlist products and past orders resolved."""
    user = load_user(db, user_id)
    user.pop("password_hash", None)
    user.pop("password", None)

    products = resolve_products(db, [w["product"] for w in user["wishlist"]])
    user["wishlist"] = [
        {"product": products.get(w["product"]), "size": w.get("size")} for w in user["wishlist"]
    ]
    orders = db["order"].find({"_id": {"$in": user["order_history"]}, "user": user["_id"]})
    by_id = {o["_id"]: o for o in orders}
    user["order_history"] = [by_id[oid] for oid in user["order_history"] if oid in by_id]
    return serialize_doc(user)
