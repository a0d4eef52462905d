"""
Order history reads, always scoped to the requesting user.
"""
from typing import List

from pymongo.database import Database

from database import get_documents, parse_object_id, serialize_doc
from errors import NotFound
from users import load_user


def list_orders(db: Database, user_id) -> List[dict]:
    user = load_user(db, user_id)
    docs = get_documents(db, "order", {"user": user["_id"]}, sort=[("created_at", -1), ("_id", -1)])
    return [serialize_doc(o) for o in docs]


def get_order(db: Database, user_id, order_id) -> dict:
    # Someone else's order looks exactly like a missing one
    oid = parse_object_id(order_id)
    owner = parse_object_id(user_id)
    order = db["order"].find_one({"_id": oid, "user": owner}) if oid and owner else None
    if not order:
        raise NotFound("Order not found or access denied.")
    return serialize_doc(order)
