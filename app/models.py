# app/models.py
from pydantic import BaseModel, ConfigDict
from typing import Optional

# Response shapes for the API docs. Request bodies are stored verbatim,
# so these are never used to validate incoming data.

class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    category: str
    description: str
    price: float
    stock: int
    rating: Optional[float] = None

class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    age: int

class Message(BaseModel):
    message: str

PRODUCT_EXAMPLE = {
    "name": "Chess",
    "category": "Strategy",
    "description": "Classic",
    "price": 500,
    "stock": 10,
}

USER_EXAMPLE = {"name": "Anna", "age": 27}
