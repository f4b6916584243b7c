# app/dependencies.py
import re
import uuid
from functools import lru_cache

from fastapi import Depends, Header, Response

from app.core.cart_storage import CartStorage, build_cart_storage
from app.core.config import get_settings
from app.core.supabase_client import supabase_admin, supabase_public
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.services.cart_store import CartStore
from app.services.catalog_service import CatalogService
from app.services.chat_service import ChatService
from app.services.checkout_service import CheckoutService

CART_TOKEN_HEADER = "X-Cart-Token"

# Client-held cart tokens: opaque, URL/file-name safe
CART_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]{8,64}")


@lru_cache
def get_cart_storage() -> CartStorage:
    """
    One storage backend per process, chosen by CART_STORAGE_BACKEND.
    """
    return build_cart_storage(get_settings())


def get_cart_token(
    response: Response,
    x_cart_token: str | None = Header(default=None),
) -> str:
    """
    Resolve the anonymous cart token.

    A missing or malformed token starts a new cart; the token in use
    is always echoed back in the X-Cart-Token response header.
    """
    if x_cart_token and CART_TOKEN_RE.fullmatch(x_cart_token):
        token = x_cart_token
    else:
        token = uuid.uuid4().hex
    response.headers[CART_TOKEN_HEADER] = token
    return token


def get_cart_store(
    token: str = Depends(get_cart_token),
    storage: CartStorage = Depends(get_cart_storage),
) -> CartStore:
    """
    The cart for this request, rehydrated from its persisted snapshot.
    """
    settings = get_settings()
    return CartStore(storage, f"{settings.CART_STORAGE_KEY}:{token}")


def get_catalog_service() -> CatalogService:
    return CatalogService(ProductRepository(supabase_public()))


def get_checkout_service() -> CheckoutService:
    return CheckoutService(OrderRepository(supabase_admin()), get_settings())


def get_chat_service() -> ChatService:
    return ChatService(get_settings())
