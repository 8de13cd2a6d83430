from fastapi import FastAPI, Depends, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional

from .cart import CartService
from .catalog import CatalogRepository
from .checkout import CheckoutService
from .config import Settings, get_settings
from .db import Base, make_engine, make_session_factory
from .errors import EmptyCartError, OrderCreationError, PaymentDeclinedError, ShippingValidationError
from .logger import get_logger, set_level
from .metrics import router as metrics_router
from .orders import OrderService
from .payment import PaymentSimulator
from .schemas import (
    AddToCartIn, CartItemOut, CartOut, CategoryOut, CheckoutIn, OrderOut, OrderTotals, ProductOut,
    UpdateQuantityIn, WishlistEntry,
)
from .storage import LocalStore
from .wishlist import WishlistService
from . import models  # noqa: F401  (registers tables on Base)

logger = get_logger("api")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app and every collaborator it serves; nothing lives at module level."""
    settings = settings or get_settings()
    set_level(settings.log_level)

    engine = make_engine(settings.database_url)
    # DB init (dev convenience); production schemas come from alembic
    Base.metadata.create_all(bind=engine)
    session_factory = make_session_factory(engine)

    store = LocalStore(settings.store_dir)
    catalog = CatalogRepository(session_factory, settings.fuzzy_threshold, settings.fuzzy_min_match_length)
    cart = CartService(store, catalog, settings.cart_storage_key, settings.shipping_threshold, settings.shipping_fee)
    orders = OrderService(session_factory, cart)

    app = FastAPI(title="Storefront", version="1.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.catalog = catalog
    app.state.cart = cart
    app.state.wishlist = WishlistService(store, settings.wishlist_storage_key)
    app.state.orders = orders
    app.state.checkout = CheckoutService(cart, orders, PaymentSimulator(settings.payment_delay_seconds))

    origins = ["*"] if settings.cors_origins == "*" else [o.strip() for o in settings.cors_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(metrics_router)
    _register_routes(app)
    return app

def get_catalog(request: Request) -> CatalogRepository:
    return request.app.state.catalog

def get_cart(request: Request) -> CartService:
    return request.app.state.cart

def get_wishlist(request: Request) -> WishlistService:
    return request.app.state.wishlist

def get_orders(request: Request) -> OrderService:
    return request.app.state.orders

def get_checkout(request: Request) -> CheckoutService:
    return request.app.state.checkout

def _cart_out(cart: CartService, items: List[CartItemOut]) -> CartOut:
    return CartOut(items=items, item_count=sum(i.quantity for i in items), totals=cart.totals(items))

def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    def health():
        return {"ok": True}

    # Catalog
    @app.get("/categories", response_model=List[CategoryOut])
    def list_categories(catalog: CatalogRepository = Depends(get_catalog)):
        return catalog.fetch_categories()

    @app.get("/products", response_model=List[ProductOut])
    def list_products(category: str = "all", search: str = "", catalog: CatalogRepository = Depends(get_catalog)):
        return catalog.fetch_products(category, search)

    @app.get("/products/{product_id}", response_model=ProductOut)
    def get_product(product_id: str, catalog: CatalogRepository = Depends(get_catalog)):
        p = catalog.fetch_product(product_id)
        if not p:
            raise HTTPException(404, "Product not found")
        return p

    # Cart
    @app.get("/cart", response_model=CartOut)
    def get_cart_view(cart: CartService = Depends(get_cart)):
        return _cart_out(cart, cart.items())

    @app.get("/cart/totals", response_model=OrderTotals)
    def get_cart_totals(cart: CartService = Depends(get_cart)):
        return cart.totals()

    @app.post("/cart/items", response_model=CartOut)
    def add_to_cart(data: AddToCartIn, cart: CartService = Depends(get_cart), catalog: CatalogRepository = Depends(get_catalog)):
        if not catalog.fetch_product(data.product_id):
            raise HTTPException(404, "Product not found")
        return _cart_out(cart, cart.add(data.product_id, data.quantity))

    @app.patch("/cart/items/{line_id}", response_model=CartOut)
    def update_cart_item(line_id: str, data: UpdateQuantityIn, cart: CartService = Depends(get_cart)):
        return _cart_out(cart, cart.set_quantity(line_id, data.quantity))

    @app.delete("/cart/items/{line_id}", response_model=CartOut)
    def remove_cart_item(line_id: str, cart: CartService = Depends(get_cart)):
        return _cart_out(cart, cart.remove(line_id))

    @app.delete("/cart", status_code=204)
    def clear_cart(cart: CartService = Depends(get_cart)):
        cart.clear()
        return Response(status_code=204)

    # Wishlist
    @app.get("/wishlist", response_model=List[WishlistEntry])
    def get_wishlist_view(wishlist: WishlistService = Depends(get_wishlist)):
        return wishlist.items()

    @app.post("/wishlist", response_model=List[WishlistEntry])
    def add_to_wishlist(data: AddToCartIn, wishlist: WishlistService = Depends(get_wishlist),
                        catalog: CatalogRepository = Depends(get_catalog)):
        p = catalog.fetch_product(data.product_id)
        if not p:
            raise HTTPException(404, "Product not found")
        wishlist.add(p)
        return wishlist.items()

    @app.delete("/wishlist/{product_id}", response_model=List[WishlistEntry])
    def remove_from_wishlist(product_id: str, wishlist: WishlistService = Depends(get_wishlist)):
        wishlist.remove(product_id)
        return wishlist.items()

    @app.delete("/wishlist", status_code=204)
    def clear_wishlist(wishlist: WishlistService = Depends(get_wishlist)):
        wishlist.clear()
        return Response(status_code=204)

    # Checkout & orders
    @app.post("/checkout", response_model=OrderOut, status_code=201)
    def checkout(data: CheckoutIn, checkout: CheckoutService = Depends(get_checkout)):
        try:
            return checkout.place_order(data.address, data.payment, email=data.email, user_id=data.user_id)
        except ShippingValidationError as e:
            raise HTTPException(422, {"message": "Invalid shipping address", "errors": e.errors})
        except PaymentDeclinedError as e:
            raise HTTPException(402, str(e))
        except EmptyCartError as e:
            raise HTTPException(409, str(e))
        except OrderCreationError as e:
            raise HTTPException(503, str(e))

    @app.get("/orders", response_model=List[OrderOut])
    def list_orders(user_id: Optional[str] = None, orders: OrderService = Depends(get_orders)):
        return orders.list_orders(user_id)

    @app.get("/orders/{order_id}", response_model=OrderOut)
    def get_order(order_id: str, orders: OrderService = Depends(get_orders)):
        o = orders.get_order(order_id)
        if not o:
            raise HTTPException(404, "Order not found")
        return o
