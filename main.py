import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import Field
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

import database
from addresses import add_address, delete_address, list_addresses, update_address
from cart import add_to_cart, adjust_quantity, clear_cart, get_cart, remove_from_cart
from catalog import get_product, list_products
from checkout import checkout
from config import CORS_ORIGINS, DATABASE_URL, DEMO_USER_ID, LOG_LEVEL, PORT
from database import ensure_indexes, get_db, parse_object_id
from errors import Conflict, NotFound, ShopError
from orders import get_order, list_orders
from schemas import Address, CamelModel
from users import get_profile
from wishlist import ADD, REMOVE, clear_wishlist, get_wishlist, toggle_wishlist

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if database.db is not None:
        ensure_indexes(database.db)
    else:
        logger.warning("DATABASE_URL is not set; API calls will fail until it is configured")
    yield


app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_current_user_id() -> str:
    """Identity of the caller. There is no auth yet, so it is always the demo user."""
    return DEMO_USER_ID


def path_product_id(product_id: str) -> str:
    # malformed ids in the URL answer 404, same as GET /api/products/{id}
    if parse_object_id(product_id) is None:
        raise NotFound("Invalid product ID format.")
    return product_id


# Request bodies
class AddToCartRequest(CamelModel):
    product_id: str
    size: Optional[str] = None


class QuantityRequest(CamelModel):
    product_id: str
    action: str
    size: Optional[str] = None


class WishlistRequest(CamelModel):
    product_id: str
    action: str = ADD
    size: Optional[str] = None


class AddressUpdate(CamelModel):
    full_name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    is_default: Optional[bool] = None


class CheckoutRequest(CamelModel):
    selected_address_id: str
    total_amount: float = Field(..., ge=0)


# Error responses: {"message": ..., "error": ...}
@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": "Invalid request.", "error": details})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    conflict = Conflict("Record already exists.")
    return JSONResponse(status_code=conflict.status_code, content={"message": conflict.message, "error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error.", "error": str(exc)})


# Health + test
@app.get("/")
def root():
    return {"message": "Storefront API running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database_url": "✅ Set" if DATABASE_URL else "❌ Not Set",
        "collections": []
    }
    try:
        if database.db is not None:
            response["collections"] = database.db.list_collection_names()[:10]
    except Exception as e:
        response["error"] = str(e)[:120]
    return response


# Products
@app.get("/api/products")
def products_index(category: Optional[str] = None, rating: Optional[str] = None,
                   sort: Optional[str] = None, q: Optional[str] = None, db: Database = Depends(get_db)):
    return {"products": list_products(db, category=category, rating=rating, sort=sort, q=q)}


@app.get("/api/products/{product_id}")
def product_detail(product_id: str, db: Database = Depends(get_db)):
    return {"product": get_product(db, product_id)}


# Cart
@app.get("/api/cart")
def cart_view(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"cart": get_cart(db, user_id)}


@app.post("/api/cart")
def cart_add(body: AddToCartRequest, db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"cart": add_to_cart(db, user_id, body.product_id, body.size)}


@app.post("/api/cart/quantity")
def cart_quantity(body: QuantityRequest, db: Database = Depends(get_db),
                  user_id: str = Depends(get_current_user_id)):
    return {"cart": adjust_quantity(db, user_id, body.product_id, body.action, body.size)}


# Must be registered before /api/cart/{product_id}
@app.delete("/api/cart/clear")
def cart_clear(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"cart": clear_cart(db, user_id)}


@app.delete("/api/cart/{product_id}")
def cart_remove(product_id: str, size: Optional[str] = None, db: Database = Depends(get_db),
                user_id: str = Depends(get_current_user_id)):
    # ?size=M removes only that size, ?size= only the unsized line, no size every line of the product
    return {"cart": remove_from_cart(db, user_id, path_product_id(product_id), size, match_size=size is not None)}


# Wishlist
@app.get("/api/wishlist")
def wishlist_view(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"wishlist": get_wishlist(db, user_id)}


@app.post("/api/wishlist")
def wishlist_update(body: WishlistRequest, db: Database = Depends(get_db),
                    user_id: str = Depends(get_current_user_id)):
    match_size = "size" in body.model_fields_set
    return {"wishlist": toggle_wishlist(db, user_id, body.product_id, body.action, body.size, match_size)}


@app.delete("/api/wishlist")
def wishlist_clear(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"wishlist": clear_wishlist(db, user_id)}


@app.delete("/api/wishlist/{product_id}")
def wishlist_remove(product_id: str, size: Optional[str] = None, db: Database = Depends(get_db),
                    user_id: str = Depends(get_current_user_id)):
    return {"wishlist": toggle_wishlist(db, user_id, path_product_id(product_id), REMOVE, size, match_size=size is not None)}


# User
@app.get("/api/user/profile")
def user_profile(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return get_profile(db, user_id)


@app.get("/api/user/addresses")
def addresses_index(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"addresses": list_addresses(db, user_id)}


@app.post("/api/user/addresses", status_code=201)
def addresses_create(body: Address, db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"addresses": add_address(db, user_id, body)}


@app.put("/api/user/addresses/{address_id}")
def addresses_update(address_id: str, body: AddressUpdate, db: Database = Depends(get_db),
                     user_id: str = Depends(get_current_user_id)):
    return {"addresses": update_address(db, user_id, address_id, body.model_dump(exclude_none=True))}


@app.delete("/api/user/addresses/{address_id}")
def addresses_delete(address_id: str, db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"addresses": delete_address(db, user_id, address_id)}


# Orders
@app.get("/api/user/orders")
def my_orders(db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"orders": list_orders(db, user_id)}


@app.get("/api/user/order/{order_id}")
def order_detail(order_id: str, db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return {"order": get_order(db, user_id, order_id)}


@app.post("/api/checkout", status_code=201)
def place_order(body: CheckoutRequest, db: Database = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    order_id = checkout(db, user_id, body.selected_address_id, body.total_amount)
    return {"success": True, "message": "Order Placed Successfully. Your cart has been cleared.", "orderId": order_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
