"""
Checkout: turn the current cart into an immutable order.

The order stores copies of everything it needs (product name and price at the
time of purchase, the shipping address) so later catalog or address edits
never change a placed order.

The order insert and the user update are two separate writes. If the process
dies between them the order exists but the cart is not cleared and the order
is missing from the user's history.
"""
import logging

from bson import ObjectId
from pymongo.database import Database

from addresses import find_address
from cart import resolve_cart
from database import create_document
from errors import InvalidArgument, InvalidState, NotFound
from schemas import Order, OrderItem, ShippingAddress
from users import load_user, save_user

logger = logging.getLogger(__name__)


def snapshot_items(user: dict, cart: list) -> list:
    items = []
    for stored, line in zip(user["cart"], cart):
        product = line["product"]
        if product is None:
            raise InvalidState("A product in your cart is no longer available.")
        items.append(OrderItem(
            product=stored["product"],
            name=product["name"],
            quantity=line["quantity"],
            price=product["price"],
            size=line["size"] or None,
        ))
    return items


def checkout(db: Database, user_id, selected_address_id, total_amount: float) -> str:
    """Place an order for the user's cart and return the new order id."""
    user = load_user(db, user_id)
    cart = resolve_cart(db, user)
    if not cart:
        raise InvalidState("Cart is empty. Cannot place order.")

    try:
        address = find_address(user, selected_address_id)
    except NotFound:
        raise InvalidArgument("Invalid delivery address selected.")

    order = Order(
        user=user["_id"],
        items=snapshot_items(user, cart),
        shipping_address=ShippingAddress(**{k: v for k, v in address.items() if k in ShippingAddress.model_fields}),
        total_amount=total_amount,
        order_status="Processing",
    )
    order_id = create_document(db, "order", order)

    user["cart"] = []
    user["order_history"].append(ObjectId(order_id))
    save_user(db, user)

    logger.info("Order %s placed by user %s (%d items)", order_id, user["_id"], len(order.items))
    return order_id