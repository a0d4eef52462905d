import pytest
from bson import ObjectId

from errors import InvalidArgument, NotFound
from wishlist import clear_wishlist, get_wishlist, toggle_wishlist


def test_add_is_deduplicated_by_product_and_size(db, products, user):
    pid = str(products["Wrap Dress"])
    toggle_wishlist(db, user, pid, "ADD")
    toggle_wishlist(db, user, pid, "ADD")
    wishlist = toggle_wishlist(db, user, pid, "ADD", "S")

    assert [(w["product"]["name"], w["size"]) for w in wishlist] == [("Wrap Dress", None), ("Wrap Dress", "S")]


def test_remove_all_entries_of_a_product(db, products, user):
    pid = str(products["Wrap Dress"])
    toggle_wishlist(db, user, pid, "ADD")
    toggle_wishlist(db, user, pid, "ADD", "M")
    toggle_wishlist(db, user, str(products["Tote Bag"]), "ADD")

    wishlist = toggle_wishlist(db, user, pid, "REMOVE")

    assert [w["product"]["name"] for w in wishlist] == ["Tote Bag"]


def test_remove_single_size(db, products, user):
    pid = str(products["Wrap Dress"])
    toggle_wishlist(db, user, pid, "ADD")
    toggle_wishlist(db, user, pid, "ADD", "M")

    wishlist = toggle_wishlist(db, user, pid, "REMOVE", "M", match_size=True)

    assert [w["size"] for w in wishlist] == [None]


def test_invalid_action_or_product(db, products, user):
    with pytest.raises(InvalidArgument):
        toggle_wishlist(db, user, str(products["Chinos"]), "LIKE")
    with pytest.raises(InvalidArgument):
        toggle_wishlist(db, user, "", "ADD")
    with pytest.raises(NotFound):
        toggle_wishlist(db, user, str(ObjectId()), "ADD")


def test_clear_and_legacy_entries(db, products, user):
    # entries stored as bare product ids are still readable
    db["user"].update_one({"_id": ObjectId(user)}, {"$set": {"wishlist": [products["Chinos"]]}})
    wishlist = get_wishlist(db, user)
    assert wishlist[0]["product"]["name"] == "Chinos"
    assert wishlist[0]["size"] is None

    assert clear_wishlist(db, user) == []
    assert get_wishlist(db, user) == []
