# sdk/catalog.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print

class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = 10, session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        # any requests-compatible session works; HTTP errors surface as that session's error class
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, resource: str, record_id: Optional[Any] = None) -> str:
        if record_id is None:
            return f"{self.base_url}/api/{resource}"
        return f"{self.base_url}/api/{resource}/{record_id}"

    # Generic CRUD over one resource family
    def _list(self, resource: str):
        r = self.session.get(self._url(resource), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _get(self, resource: str, record_id: Any):
        r = self.session.get(self._url(resource, record_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _create(self, resource: str, fields: Dict[str, Any]):
        r = self.session.post(self._url(resource), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _update(self, resource: str, record_id: Any, fields: Dict[str, Any]):
        r = self.session.put(self._url(resource, record_id), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _delete(self, resource: str, record_id: Any):
        r = self.session.delete(self._url(resource, record_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self):
        return self._list("products")

    def get_product(self, product_id: int):
        return self._get("products", product_id)

    def create_product(self, name: str, category: str, description: str, price: float, stock: int,
                       rating: Optional[float] = None, **extra: Any):
        fields = {"name": name, "category": category, "description": description, "price": price, "stock": stock}
        if rating is not None:
            fields["rating"] = rating
        fields.update(extra)
        return self._create("products", fields)

    def update_product(self, product_id: int, **fields: Any):
        return self._update("products", product_id, fields)

    def delete_product(self, product_id: int):
        return self._delete("products", product_id)

    # Users
    def list_users(self):
        return self._list("users")

    def get_user(self, user_id: str):
        return self._get("users", user_id)

    def create_user(self, name: str, age: int, **extra: Any):
        return self._create("users", {"name": name, "age": age, **extra})

    def update_user(self, user_id: str, **fields: Any):
        return self._update("users", user_id, fields)

    def delete_user(self, user_id: str):
        return self._delete("users", user_id)

    # Async create (example)
    async def create_product_async(self, fields: Dict[str, Any], transport: Optional[httpx.AsyncBaseTransport] = None):
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.post("/api/products", json=fields)
            r.raise_for_status()
            return r.json()


def _parse_field(raw: str):
    """key=value -> (key, value), with numbers converted."""
    key, _, value = raw.partition("=")
    for cast in (int, float):
        try:
            return key, cast(value)
        except ValueError:
            continue
    return key, value


if __name__ == "__main__":
    import argparse
    from sdk.catalog import CatalogClient
    from app.config import get_settings

    parser = argparse.ArgumentParser(description="Catalog CLI")
    parser.add_argument("--base-url", default=get_settings().api_url, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--category", required=True, help="Product category")
    cp.add_argument("--description", default="", help="Product description")
    cp.add_argument("--price", type=float, required=True, help="Price in rubles")
    cp.add_argument("--stock", type=int, required=True, help="Items in stock")
    cp.add_argument("--rating", type=float, help="Rating out of 5")

    up = subparsers.add_parser("update-product", help="Update product fields")
    up.add_argument("--product-id", required=True, help="ID of the product")
    up.add_argument("fields", nargs="+", help="key=value pairs")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    # ---------------------------
    # User commands
    # ---------------------------
    subparsers.add_parser("list-users", help="List all users")

    gu = subparsers.add_parser("get-user", help="Get a user by its ID")
    gu.add_argument("--user-id", required=True, help="ID of the user")

    cu = subparsers.add_parser("create-user", help="Create a new user")
    cu.add_argument("--name", required=True, help="User name")
    cu.add_argument("--age", type=int, required=True, help="User age")

    uu = subparsers.add_parser("update-user", help="Update user fields")
    uu.add_argument("--user-id", required=True, help="ID of the user")
    uu.add_argument("fields", nargs="+", help="key=value pairs")

    du = subparsers.add_parser("delete-user", help="Delete a user")
    du.add_argument("--user-id", required=True, help="ID of the user")

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.category, args.description, args.price, args.stock, args.rating))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, **dict(_parse_field(f) for f in args.fields)))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
    elif args.command == "list-users":
        print(c.list_users())
    elif args.command == "get-user":
        print(c.get_user(args.user_id))
    elif args.command == "create-user":
        print(c.create_user(args.name, args.age))
    elif args.command == "update-user":
        print(c.update_user(args.user_id, **dict(_parse_field(f) for f in args.fields)))
    elif args.command == "delete-user":
        print(c.delete_user(args.user_id))
