#!/usr/bin/env python
import os
import uuid

from mockshop_sdk.shopclient import ShopAPIError, ShopClient


def main():
    c = ShopClient(base_url=os.environ.get("BASE_URL", "http://localhost:3000"))

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    print(c.reset())

    # -----------------------------
    # Register a shopper
    # -----------------------------
    email = f"demo_{uuid.uuid4().hex[:8]}@test.com"
    print(f"\nRegistering {email}...")
    print(c.register(email, "DemoPass123!"))

    print("\nRegistering the same email again...")
    try:
        c.register(email, "DemoPass123!")
    except ShopAPIError as e:
        print(f"Refused as expected: {e}")

    # -----------------------------
    # Browse and search
    # -----------------------------
    print("\nListing products...")
    for p in c.list_products():
        print(f"  {p['id']}: {p['name']} ${p['price']:.2f}")

    print("\nSearching for 'wireless'...")
    print([p["name"] for p in c.search_products("wireless")])

    # -----------------------------
    # Fill the cart
    # -----------------------------
    print("\nAdding products to cart...")
    c.add_to_cart(1, 2)
    print(c.add_to_cart(3, 1))

    print("\nViewing cart...")
    cart = c.view_cart()
    print(cart)
    print(f"Total: ${cart['total']:.2f}")


if __name__ == "__main__":
    main()
