# mockshop/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import pages
from .auth import bearer_scheme, require_auth, resolve_user
from .config import get_settings
from .core import AddToCartIn, CredentialsIn, wants_html
from .database import PRODUCTS, init_store
from .logic import (
    cart_add_logic,
    find_product,
    get_product_logic,
    list_products_logic,
    login_logic,
    register_logic,
    reset_logic,
    search_products_logic,
    view_cart_logic,
)
from .models import User

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_store()
    logger.info(
        "Mock shop running on http://%s:%d with %d products",
        settings.HOST, settings.PORT, len(PRODUCTS),
    )
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Store is usable even when the app is driven without lifespan events.
init_store()


# ---------------------------
# Error bodies: {"error": ...}
# ---------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# ---------------------------
# Auth endpoints (API only)
# ---------------------------
@app.post("/auth/register", status_code=201)
async def register(payload: CredentialsIn):
    return await register_logic(payload)


@app.post("/auth/login")
async def login(payload: CredentialsIn):
    return await login_logic(payload)


# ---------------------------
# Pages
# ---------------------------
@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/login", status_code=302)


@app.get("/register", response_class=HTMLResponse)
async def register_page():
    return pages.register_page()


@app.get("/login", response_class=HTMLResponse)
async def login_page():
    return pages.login_page()


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products")
async def list_products(request: Request):
    if wants_html(request):
        return HTMLResponse(pages.products_page())
    return await list_products_logic()


# JSON-only listing used by the products page script
@app.get("/api/products")
async def api_list_products():
    return await list_products_logic()


@app.get("/products/search")
async def search_products(q: Optional[str] = None):
    return await search_products_logic(q)


@app.get("/products/{product_id}")
async def get_product(product_id: str, request: Request):
    if not wants_html(request):
        return await get_product_logic(product_id)
    product = find_product(product_id)
    if product is None:
        return HTMLResponse(pages.not_found_page(), status_code=404)
    return HTMLResponse(pages.product_page(product))


# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/cart")
async def view_cart(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
):
    if wants_html(request):
        return HTMLResponse(pages.cart_page())
    user = resolve_user(credentials)
    return await view_cart_logic(user)


# JSON-only cart used by the cart page script
@app.get("/api/cart")
async def api_view_cart(user: User = Depends(require_auth)):
    return await view_cart_logic(user)


@app.post("/cart/items")
async def cart_add(payload: AddToCartIn, user: User = Depends(require_auth)):
    return await cart_add_logic(user, payload)


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    return await reset_logic()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
