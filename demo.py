#!/usr/bin/env python
import requests
from app.config import get_settings
from sdk.catalog import CatalogClient

def main():
    c = CatalogClient(base_url=get_settings().api_url)

    # -----------------------------
    # Create a product
    # -----------------------------
    print("Creating product...")
    chess = c.create_product("Chess", "Strategy", "Classic", 500, 10)
    print(chess)

    # -----------------------------
    # Fetch it back
    # -----------------------------
    print(f"\nGetting product {chess['id']}...")
    print(c.get_product(chess["id"]))

    # -----------------------------
    # Update price and stock, the id stays
    # -----------------------------
    print("\nUpdating product...")
    print(c.update_product(chess["id"], id=999, price=450, stock=7))

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    for p in c.list_products():
        print(f"  #{p.get('id')} {p.get('name')}: {p.get('price')} ₽ (в наличии: {p.get('stock')})")

    # -----------------------------
    # Delete it, then a second lookup is a 404
    # -----------------------------
    print("\nDeleting product...")
    print(c.delete_product(chess["id"]))
    try:
        c.get_product(chess["id"])
    except requests.exceptions.HTTPError as e:
        print(f"After delete: HTTP {e.response.status_code} {e.response.json()}")

    # -----------------------------
    # Users
    # -----------------------------
    print("\nCreating user...")
    anna = c.create_user("Anna", 27)
    print(anna)
    print(c.update_user(anna["id"], age=28))
    print(c.list_users())
    print(c.delete_user(anna["id"]))

if __name__ == "__main__":
    main()
