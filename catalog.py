"""
Catalog reads: filtered listing, product detail, and the product lookup used
to resolve cart/wishlist lines.
"""
import re
from typing import Any, Dict, Iterable, List, Optional, Union

from bson import ObjectId
from pymongo.database import Database

from database import parse_object_id, serialize_doc
from errors import InvalidArgument, NotFound

SORT_OPTIONS = {
    "priceLowToHigh": [("price", 1)],
    "priceHighToLow": [("price", -1)],
}


def parse_rating(rating: Union[str, float, None]) -> Optional[float]:
    """Minimum rating from a query value; blank means no filter."""
    if rating is None or isinstance(rating, (int, float)):
        return rating
    if not rating.strip():
        return None
    try:
        return float(rating)
    except ValueError:
        raise InvalidArgument("Rating must be a number.")


def build_product_query(category: Optional[str] = None, rating: Union[str, float, None] = None,
                        q: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if category:
        categories = [c.strip() for c in category.split(",") if c.strip()]
        if categories:
            query["category"] = {"$in": categories}
    min_rating = parse_rating(rating)
    if min_rating is not None:
        query["rating"] = {"$gte": min_rating}
    if q:
        query["name"] = {"$regex": re.escape(q), "$options": "i"}
    return query


def list_products(db: Database, category: Optional[str] = None, rating: Union[str, float, None] = None,
                  sort: Optional[str] = None, q: Optional[str] = None) -> List[dict]:
    cursor = db["product"].find(build_product_query(category, rating, q))
    sort_spec = SORT_OPTIONS.get(sort or "")
    if sort_spec:
        cursor = cursor.sort(sort_spec)
    return [serialize_doc(p) for p in cursor]


def get_product(db: Database, product_id: str) -> dict:
    oid = parse_object_id(product_id)
    if oid is None:
        raise NotFound("Invalid product ID format.")
    product = db["product"].find_one({"_id": oid})
    if not product:
        raise NotFound("Product not found")
    return serialize_doc(product)


def product_exists(db: Database, product_id: ObjectId) -> bool:
    return db["product"].find_one({"_id": product_id}, {"_id": 1}) is not None


def resolve_products(db: Database, product_ids: Iterable[ObjectId]) -> Dict[ObjectId, dict]:
    """Map each referenced product id to its serialized document; missing products are left out."""
    ids = list(set(product_ids))
    if not ids:
        return {}
    return {p["_id"]: serialize_doc(p) for p in db["product"].find({"_id": {"$in": ids}})}
