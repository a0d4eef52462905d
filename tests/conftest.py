from datetime import datetime, timezone

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from config import DEMO_USER_ID
from database import get_db
from main import app

PRODUCTS = [
    {"name": "Oxford Shirt", "description": "Cotton shirt", "price": 40.0, "category": "men-clothing",
     "image_url": "https://img.example/oxford.jpg", "rating": 4.5, "sizes": ["S", "M", "L"], "in_stock": True},
    {"name": "Chinos", "description": "Slim chinos", "price": 25.0, "category": "men-clothing",
     "image_url": "https://img.example/chinos.jpg", "rating": 3.5, "sizes": ["30", "32"], "in_stock": True},
    {"name": "Wrap Dress", "description": "Floral dress", "price": 55.0, "category": "women-clothing",
     "image_url": "https://img.example/dress.jpg", "rating": 4.8, "sizes": ["S", "M"], "in_stock": True},
    {"name": "Knit Cardigan", "description": "Ribbed knit", "price": 30.0, "category": "women-clothing",
     "image_url": "https://img.example/cardigan.jpg", "rating": 4.0, "sizes": [], "in_stock": True},
    {"name": "Tote Bag", "description": "Leather tote", "price": 70.0, "category": "other",
     "image_url": "https://img.example/tote.jpg", "rating": 4.9, "sizes": [], "in_stock": True},
]


@pytest.fixture
def db():
    return mongomock.MongoClient()["storefront_test"]


@pytest.fixture
def products(db):
    """Insert the sample catalog; returns {name: ObjectId}."""
    ids = {}
    for p in PRODUCTS:
        ids[p["name"]] = db["product"].insert_one(dict(p)).inserted_id
    return ids


@pytest.fixture
def address_id():
    return ObjectId()


@pytest.fixture
def user(db, address_id):
    doc = {
        "_id": ObjectId(DEMO_USER_ID),
        "name": "Demo User",
        "email": "demo@example.com",
        "password_hash": "secret-hash",
        "addresses": [{
            "_id": address_id,
            "full_name": "Demo Home",
            "street": "123 Main Street",
            "city": "Reactville",
            "state": "CA",
            "zip_code": "90210",
            "phone": "5551234567",
            "is_default": True,
        }],
        "cart": [],
        "wishlist": [],
        "order_history": [],
        "created_at": datetime.now(timezone.utc),
    }
    db["user"].insert_one(doc)
    return DEMO_USER_ID


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
