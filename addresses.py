"""
Address book embedded in the user document.
"""
from typing import List

from bson import ObjectId
from pymongo.database import Database

from database import parse_object_id, serialize_doc
from errors import NotFound
from schemas import Address
from users import load_user, save_user


def find_address(user: dict, address_id) -> dict:
    oid = parse_object_id(address_id)
    address = next((a for a in user["addresses"] if oid is not None and a.get("_id") == oid), None)
    if address is None:
        raise NotFound("Address not found.")
    return address


def list_addresses(db: Database, user_id) -> List[dict]:
    return serialize_doc(load_user(db, user_id)["addresses"])


def add_address(db: Database, user_id, address: Address) -> List[dict]:
    user = load_user(db, user_id)
    user["addresses"].append({"_id": ObjectId(), **address.model_dump()})
    save_user(db, user)
    return serialize_doc(user["addresses"])


def update_address(db: Database, user_id, address_id, fields: dict) -> List[dict]:
    """Merge the given fields into the address; keys set to None are ignored."""
    user = load_user(db, user_id)
    address = find_address(user, address_id)
    address.update({k: v for k, v in fields.items() if v is not None and k != "_id"})
    save_user(db, user)
    return serialize_doc(user["addresses"])


def delete_address(db: Database, user_id, address_id) -> List[dict]:
    user = load_user(db, user_id)
    address = find_address(user, address_id)
    user["addresses"] = [a for a in user["addresses"] if a is not address]
    save_user(db, user)
    return serialize_doc(user["addresses"])
