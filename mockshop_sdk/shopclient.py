# mockshop_sdk/shopclient.py
import os
from typing import Any, Dict, Optional

import requests

DEFAULT_BASE_URL = os.environ.get("BASE_URL", "http://localhost:3000")


class ShopAPIError(Exception):
    """Raised for any 4xx/5xx answer; carries the server's error text."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ShopClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # any object with a requests-style get/post works, e.g. a FastAPI TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None
        self.email: Optional[str] = None

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _handle(self, r) -> Any:
        if r.status_code >= 400:
            try:
                message = r.json().get("error", r.text)
            except ValueError:
                message = r.text
            raise ShopAPIError(r.status_code, message)
        return r.json()

    def set_token(self, token: Optional[str]):
        self.token = token

    def reset(self):
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        return self._handle(r)

    # Auth
    def register(self, email: str, password: str):
        r = self.session.post(f"{self.base_url}/auth/register", json={
            "email": email, "password": password
        }, timeout=self.timeout)
        data = self._handle(r)
        self.token, self.email = data["token"], data["email"]
        return data

    def login(self, email: str, password: str):
        r = self.session.post(f"{self.base_url}/auth/login", json={
            "email": email, "password": password
        }, timeout=self.timeout)
        data = self._handle(r)
        self.token, self.email = data["token"], data["email"]
        return data

    # Products
    def list_products(self):
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        return self._handle(r)["products"]

    def search_products(self, query: str):
        r = self.session.get(f"{self.base_url}/products/search", params={"q": query}, timeout=self.timeout)
        return self._handle(r)["products"]

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return self._handle(r)["product"]

    # Cart
    def add_to_cart(self, product_id: int, quantity: int = 1):
        r = self.session.post(f"{self.base_url}/cart/items", json={
            "productId": product_id, "quantity": quantity
        }, headers=self._headers(), timeout=self.timeout)
        return self._handle(r)

    def view_cart(self):
        r = self.session.get(f"{self.base_url}/api/cart", headers=self._headers(), timeout=self.timeout)
        return self._handle(r)


if __name__ == "__main__":
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Mock shop client")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server URL")
    parser.add_argument("--token", default=os.environ.get("MOCKSHOP_TOKEN"), help="Bearer token for cart commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Auth commands
    # ---------------------------
    for name in ("register", "login"):
        ap = subparsers.add_parser(name, help=f"{name.capitalize()} and print the issued token")
        ap.add_argument("--email", required=True)
        ap.add_argument("--password", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    sp = subparsers.add_parser("search", help="Search products by name, description or category")
    sp.add_argument("--query", default="", help="Search term")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    # ---------------------------
    # Cart commands
    # ---------------------------
    add = subparsers.add_parser("add-to-cart", help="Add product to cart")
    add.add_argument("--product-id", type=int, required=True, help="Product ID")
    add.add_argument("--qty", type=int, default=1, help="Quantity to add")

    subparsers.add_parser("view-cart", help="View cart contents")
    subparsers.add_parser("reset", help="Reset users and carts")

    args = parser.parse_args()
    c = ShopClient(base_url=args.base_url)
    c.set_token(args.token)

    try:
        if args.command == "register":
            out = c.register(args.email, args.password)
        elif args.command == "login":
            out = c.login(args.email, args.password)
        elif args.command == "list-products":
            out = c.list_products()
        elif args.command == "search":
            out = c.search_products(args.query)
        elif args.command == "get-product":
            out = c.get_product(args.product_id)
        elif args.command == "add-to-cart":
            out = c.add_to_cart(args.product_id, args.qty)
        elif args.command == "view-cart":
            out = c.view_cart()
        else:
            out = c.reset()
    except ShopAPIError as e:
        parser.exit(1, f"{e}\n")
    print(json.dumps(out, indent=2))
