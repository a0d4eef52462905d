"""
One-off catalog load from a JSON file, plus an optional demo user.

    python seed.py products.json --demo-user
"""
import argparse
import json
import logging
from pathlib import Path
from typing import List

from bson import ObjectId
from pymongo.database import Database

from config import DEMO_USER_ID, SEED_FILE
from database import create_document, ensure_indexes, get_db
from schemas import Address, Product, User

logger = logging.getLogger(__name__)

DEMO_ADDRESS = Address(
    full_name="Demo Home",
    street="123 Main Street",
    city="Reactville",
    state="CA",
    zip_code="90210",
    phone="5551234567",
    is_default=True,
)


def load_seed_file(path) -> List[Product]:
    with Path(path).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of products.")
    return [Product(**entry) for entry in data]


def seed_products(db: Database, products: List[Product]) -> int:
    """Replace the whole catalog."""
    db["product"].delete_many({})
    for product in products:
        create_document(db, "product", product)
    logger.info("Product data seeded (%d items).", len(products))
    return len(products)


def seed_demo_user(db: Database, user_id: str = DEMO_USER_ID) -> str:
    oid = ObjectId(user_id)
    db["user"].delete_many({"$or": [{"_id": oid}, {"email": "demo@storefront-demo.com"}]})
    user = User(
        name="Demo User",
        email="demo@storefront-demo.com",
        password_hash="!",  # demo account cannot log in
        addresses=[{"_id": ObjectId(), **DEMO_ADDRESS.model_dump()}],
    )
    create_document(db, "user", {"_id": oid, **user.model_dump()})
    logger.info("Demo user %s created.", user_id)
    return user_id


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Seed the storefront catalog.")
    parser.add_argument("path", nargs="?", default=SEED_FILE, help="JSON file with a list of products")
    parser.add_argument("--demo-user", action="store_true", help="also (re)create the demo user")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    db = get_db()
    ensure_indexes(db)
    seed_products(db, load_seed_file(args.path))
    if args.demo_user:
        seed_demo_user(db)


if __name__ == "__main__":
    main()
