import pytest
from bson import ObjectId

from catalog import build_product_query, get_product, list_products, parse_rating
from errors import InvalidArgument, NotFound


def names(products):
    return [p["name"] for p in products]


def test_unfiltered_listing_returns_everything(db, products):
    assert sorted(names(list_products(db))) == sorted(products)


def test_category_rating_and_price_sort(db, products):
    result = list_products(db, category="men-clothing,women-clothing", rating=4, sort="priceLowToHigh")
    assert names(result) == ["Knit Cardigan", "Oxford Shirt", "Wrap Dress"]


def test_price_high_to_low(db, products):
    assert names(list_products(db, sort="priceHighToLow")) == [
        "Tote Bag", "Wrap Dress", "Oxford Shirt", "Knit Cardigan", "Chinos",
    ]


def test_search_is_case_insensitive_substring(db, products):
    assert names(list_products(db, q="DRESS")) == ["Wrap Dress"]
    assert names(list_products(db, q="a.")) == []


def test_query_builder_ignores_empty_categories():
    assert build_product_query(category=" , ") == {}
    assert build_product_query(category="other, men-clothing") == {"category": {"$in": ["other", "men-clothing"]}}


def test_blank_rating_is_no_filter():
    assert build_product_query(rating="") == {}
    assert build_product_query(rating="  ") == {}
    assert build_product_query(rating="4.5") == {"rating": {"$gte": 4.5}}


def test_non_numeric_rating_is_rejected():
    with pytest.raises(InvalidArgument):
        parse_rating("high")


def test_serialized_product_has_string_id(db, products):
    product = get_product(db, str(products["Tote Bag"]))
    assert product["id"] == str(products["Tote Bag"])
    assert "_id" not in product


def test_missing_or_malformed_product(db, products):
    with pytest.raises(NotFound):
        get_product(db, str(ObjectId()))
    with pytest.raises(NotFound):
        get_product(db, "xyz")
