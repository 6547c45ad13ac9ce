# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .core import ResourceCollection, product_collection, user_collection
from .database import JsonFileStore, ResourceStore
from .errors import NotFoundError
from .models import PRODUCT_EXAMPLE, USER_EXAMPLE, Message, Product, User
from .observability import setup_logging

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Server running at http://%s:%s", settings.host, settings.port)
    logger.info("API docs available at http://%s:%s%s", settings.host, settings.port, settings.docs_url)
    yield


app = FastAPI(
    title="Shop API",
    version="1.0.0",
    description="API for managing a board game shop",
    docs_url=settings.docs_url,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info(
        "[%s] %s %s",
        request.method, response.status_code, request.url.path,
        extra={"method": request.method, "status_code": response.status_code, "path": request.url.path},
    )
    return response


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("%s: %s", request.url.path, exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


# ---------------------------
# Dependencies
# ---------------------------
def get_product_store(settings: Settings = Depends(get_settings)) -> ResourceStore:
    return JsonFileStore(settings.products_path)

def get_user_store(settings: Settings = Depends(get_settings)) -> ResourceStore:
    return JsonFileStore(settings.users_path)

def get_products(store: ResourceStore = Depends(get_product_store)) -> ResourceCollection:
    return product_collection(store)

def get_users(store: ResourceStore = Depends(get_user_store)) -> ResourceCollection:
    return user_collection(store)

NOT_FOUND = {404: {"model": Message, "description": "No record with this id"}}


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products", tags=["Products"], responses={200: {"model": list[Product]}})
async def list_products(products: ResourceCollection = Depends(get_products)):
    return products.list()

@app.get("/api/products/{product_id}", tags=["Products"], responses={200: {"model": Product}, **NOT_FOUND})
async def get_product(product_id: str, products: ResourceCollection = Depends(get_products)):
    return products.get(product_id)

@app.post("/api/products", status_code=201, tags=["Products"], responses={201: {"model": Product}})
async def create_product(
    payload: Dict[str, Any] = Body({}, examples=[PRODUCT_EXAMPLE]),
    products: ResourceCollection = Depends(get_products),
):
    logger.info("Body: %s", payload)
    return products.create(payload)

@app.put("/api/products/{product_id}", tags=["Products"], responses={200: {"model": Product}, **NOT_FOUND})
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Body({}, examples=[{"price": 450, "stock": 7}]),
    products: ResourceCollection = Depends(get_products),
):
    logger.info("Body: %s", payload)
    return products.update(product_id, payload)

@app.delete("/api/products/{product_id}", tags=["Products"], responses={200: {"model": Message}, **NOT_FOUND})
async def delete_product(product_id: str, products: ResourceCollection = Depends(get_products)):
    return products.delete(product_id)


# ---------------------------
# User endpoints
# ---------------------------
@app.get("/api/users", tags=["Users"], responses={200: {"model": list[User]}})
async def list_users(users: ResourceCollection = Depends(get_users)):
    return users.list()

@app.get("/api/users/{user_id}", tags=["Users"], responses={200: {"model": User}, **NOT_FOUND})
async def get_user(user_id: str, users: ResourceCollection = Depends(get_users)):
    return users.get(user_id)

@app.post("/api/users", status_code=201, tags=["Users"], responses={201: {"model": User}})
async def create_user(
    payload: Dict[str, Any] = Body({}, examples=[USER_EXAMPLE]),
    users: ResourceCollection = Depends(get_users),
):
    logger.info("Body: %s", payload)
    return users.create(payload)

@app.put("/api/users/{user_id}", tags=["Users"], responses={200: {"model": User}, **NOT_FOUND})
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Body({}, examples=[{"age": 28}]),
    users: ResourceCollection = Depends(get_users),
):
    logger.info("Body: %s", payload)
    return users.update(user_id, payload)

@app.delete("/api/users/{user_id}", tags=["Users"], responses={200: {"model": Message}, **NOT_FOUND})
async def delete_user(user_id: str, users: ResourceCollection = Depends(get_users)):
    return users.delete(user_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
