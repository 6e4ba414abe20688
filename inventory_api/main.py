"""
    Inventory API

    This module implements a FastAPI-based service for tracking inventory items.
    Clients register items with a name, a description and an optional photo,
    then list, fetch, update, delete or search them, and fetch or replace an
    item's photo.

    Items are kept either in process memory or in a database table, selected
    at startup through Settings.storage_backend. Photos are stored as files in
    Settings.photo_dir, which is also served read-only under /photos.

    The service exposes:
    - POST /register, POST /search
    - GET/PUT/DELETE /inventory/{id}, GET /inventory
    - GET/PUT /inventory/{id}/photo
    - Health endpoint, HTML forms and the generated API docs (/docs)
"""
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, FastAPI, File, Form, HTTPException, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import schemas
from .config import Settings
from .errors import StorageError
from .photos import PhotoStore
from .storage import InventoryStore, create_store

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
ERROR_RESPONSES = {404: {"model": schemas.Error}}
# signed 32-bit, the range of the serial id column
MIN_ID, MAX_ID = -(2 ** 31), 2 ** 31 - 1

router = APIRouter()


def get_store(request: Request) -> InventoryStore:
    return request.app.state.store


def get_photos(request: Request) -> PhotoStore:
    return request.app.state.photos


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_id(value) -> int:
    """
    Parse an item ID from a path segment or form field.

    Integral numbers ("7", " 7 ", "7.0") give that integer; anything else
    gives 0. Numbers outside the id column range give -1. Neither 0 nor -1
    ever matches an item.
    """
    if value is None:
        return 0
    try:
        item_id = int(str(value).strip())
    except ValueError:
        try:
            number = float(value)
        except ValueError:
            return 0
        if number != number or number in (float("inf"), float("-inf")) or not number.is_integer():
            return 0
        item_id = int(number)
    if not MIN_ID <= item_id <= MAX_ID:
        return -1
    return item_id


def photo_url(settings: Settings, item_id: int) -> str:
    return f"{settings.base_url}/inventory/{item_id}/photo"


def require_item(store: InventoryStore, item_id: int) -> schemas.InventoryItem:
    item = store.get_by_id(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="inventory item not found")
    return item


def has_upload(photo: Optional[UploadFile]) -> bool:
    return photo is not None and bool(photo.filename)


async def read_item_update(request: Request) -> schemas.InventoryItemUpdate:
    """
    Read the update body of PUT /inventory/{id}, sent as JSON or as a form.

    Raises:
        HTTPException: 400 if the body cannot be parsed or holds lists or objects
    """
    content_type = request.headers.get("content-type", "")
    data = {}
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="request body is not valid JSON")
    elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        data = {key: value for key, value in form.items() if isinstance(value, str)}

    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="request body must be an object")
    # scalar JSON values are stored as their text, like form fields; falsy ones are skipped
    data = {
        key: (str(value) if value else None) if isinstance(value, (bool, int, float)) else value
        for key, value in data.items()
    }
    try:
        return schemas.InventoryItemUpdate.model_validate(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"invalid update: {e.errors()[0]['msg']}")


@router.get("/healthz", response_model=dict, tags=["health"])
def health():
    """
    Health check endpoint for the inventory service.

    Returns:
        dict: {"status": "healthy"} while the service is running
    """
    return {"status": "healthy"}


@router.post(
    "/register",
    response_model=schemas.Message,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": schemas.Error}},
    tags=["inventory"],
)
def register_inventory_item(
    inventory_name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
    settings: Settings = Depends(get_settings),
):
    """
    Register a new inventory item.

    Args:
        inventory_name: Name of the item (required)
        description: Item description (defaults to "")
        photo: Optional photo file

    Returns:
        Confirmation message

    Raises:
        HTTPException: 400 if inventory_name is missing or empty
    """
    if not inventory_name:
        raise HTTPException(status_code=400, detail="inventory_name is required")

    photo_filename = photos.save(photo) if has_upload(photo) else None
    item = schemas.InventoryItemCreate(
        inventory_name=inventory_name,
        description=description or "",
        photo_filename=photo_filename,
    )
    try:
        created = store.insert(item, photo_url_for=lambda item_id: photo_url(settings, item_id))
    except StorageError:
        if photo_filename:
            photos.delete(photo_filename)
        raise

    logger.info(f"Registered inventory item {created.id}")
    return {"message": "inventory registered successfully"}


@router.get("/inventory", response_model=List[schemas.InventoryItem], responses=ERROR_RESPONSES, tags=["inventory"])
def list_inventory_items(store: InventoryStore = Depends(get_store)):
    """
    List all inventory items.

    Raises:
        HTTPException: 404 if there are no items
    """
    items = store.list()
    if not items:
        raise HTTPException(status_code=404, detail="no inventory items found")
    return items


@router.get("/inventory/{item_id}", response_model=schemas.InventoryItem, responses=ERROR_RESPONSES, tags=["inventory"])
def get_inventory_item(item_id: str, store: InventoryStore = Depends(get_store)):
    """
    Get a single inventory item by ID.

    Raises:
        HTTPException: 404 if item not found
    """
    return require_item(store, parse_id(item_id))


@router.put(
    "/inventory/{item_id}",
    response_model=schemas.Message,
    responses={404: {"model": schemas.Error}, 400: {"model": schemas.Error}},
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": schemas.InventoryItemUpdate.model_json_schema()},
                "application/x-www-form-urlencoded": {"schema": schemas.InventoryItemUpdate.model_json_schema()},
            }
        }
    },
    tags=["inventory"],
)
def update_inventory_item(
    item_id: str,
    update: schemas.InventoryItemUpdate = Depends(read_item_update),
    store: InventoryStore = Depends(get_store),
):
    """
    Update the name and/or description of an inventory item.

    Empty values leave the stored value unchanged.

    Raises:
        HTTPException: 404 if item not found
    """
    updated = store.update(parse_id(item_id), update)
    if updated is None:
        raise HTTPException(status_code=404, detail="inventory item not found")
    logger.info(f"Updated inventory item {updated.id}")
    return {"message": "inventory item updated successfully"}


@router.delete("/inventory/{item_id}", response_model=schemas.Message, responses=ERROR_RESPONSES, tags=["inventory"])
def delete_inventory_item(
    item_id: str,
    background_tasks: BackgroundTasks,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
):
    """
    Delete an inventory item. Its photo file is removed after the response.

    Raises:
        HTTPException: 404 if item not found
    """
    deleted = store.delete(parse_id(item_id))
    if deleted is None:
        raise HTTPException(status_code=404, detail="inventory item not found")
    if deleted.photo_filename:
        background_tasks.add_task(photos.delete, deleted.photo_filename)
    logger.info(f"Deleted inventory item {deleted.id}")
    return {"message": "inventory item deleted successfully"}


@router.get(
    "/inventory/{item_id}/photo",
    response_class=FileResponse,
    responses={200: {"content": {"image/jpeg": {}}}, 404: {"model": schemas.Error}},
    tags=["photos"],
)
def get_inventory_photo(
    item_id: str,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
):
    """
    Get the photo of an inventory item, always served as image/jpeg.

    Raises:
        HTTPException: 404 if the item does not exist or has no photo
    """
    item = require_item(store, parse_id(item_id))
    if not item.photo_filename or not photos.exists(item.photo_filename):
        raise HTTPException(status_code=404, detail="photo not found for this inventory item")
    return FileResponse(photos.path(item.photo_filename), media_type="image/jpeg")


@router.put(
    "/inventory/{item_id}/photo",
    response_model=schemas.Message,
    responses={404: {"model": schemas.Error}, 400: {"model": schemas.Error}},
    tags=["photos"],
)
def update_inventory_photo(
    item_id: str,
    background_tasks: BackgroundTasks,
    photo: Optional[UploadFile] = File(None),
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
    settings: Settings = Depends(get_settings),
):
    """
    Replace the photo of an inventory item. The old file is removed after the response.

    Raises:
        HTTPException: 404 if item not found, 400 if no photo was uploaded
    """
    item = require_item(store, parse_id(item_id))
    if not has_upload(photo):
        raise HTTPException(status_code=400, detail="photo file is required")

    filename = photos.save(photo)
    try:
        updated = store.update_photo(item.id, filename, photo_url(settings, item.id))
    except StorageError:
        photos.delete(filename)
        raise
    if updated is None:
        photos.delete(filename)
        raise HTTPException(status_code=404, detail="inventory item not found")

    if item.photo_filename:
        background_tasks.add_task(photos.delete, item.photo_filename)
    logger.info(f"Replaced photo of inventory item {item.id}")
    return {"message": "photo updated successfully"}


@router.post(
    "/search",
    response_model=schemas.InventoryItem,
    responses={404: {"model": schemas.Error}, 400: {"model": schemas.Error}},
    tags=["inventory"],
)
def search_inventory_item(
    id: Optional[str] = Form(None),
    includePhoto: Optional[str] = Form(None),
    store: InventoryStore = Depends(get_store),
):
    """
    Look up an inventory item by the ID sent as a form field.

    When includePhoto is "on" (an HTML checkbox) and the item has a photo,
    the photo URL is appended to the returned description. Stored data is
    not changed.

    Raises:
        HTTPException: 400 if id is missing or zero, 404 if item not found
    """
    item_id = parse_id(id)
    if not item_id:
        raise HTTPException(status_code=400, detail="id is required")

    item = require_item(store, item_id)
    if includePhoto == "on" and item.photo_filename:
        item = item.model_copy(update={"description": f"{item.description or ''} {item.photo_url}"})
    return item


@router.get("/RegisterForm.html", response_class=FileResponse, include_in_schema=False)
def register_form():
    return FileResponse(STATIC_DIR / "RegisterForm.html", media_type="text/html")


@router.get("/SearchForm.html", response_class=FileResponse, include_in_schema=False)
def search_form():
    return FileResponse(STATIC_DIR / "SearchForm.html", media_type="text/html")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "invalid request"
    return JSONResponse(status_code=400, content={"error": message})


async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "storage backend failure"})


def method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Creates the photo directory and the storage backend; failures here
    propagate so the service never starts half configured.

    Args:
        settings: Service settings (read from the environment when omitted)

    Returns:
        FastAPI: the configured application
    """
    settings = settings or Settings()

    photos = PhotoStore(settings.photo_dir)
    photos.ensure_root()
    store = create_store(settings)

    app = FastAPI(
        title="Inventory API",
        description="API documentation",
        version="1.0.0",
        servers=[{"url": settings.base_url}],
    )
    app.state.settings = settings
    app.state.photos = photos
    app.state.store = store

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)

    app.include_router(router)
    app.mount("/photos", StaticFiles(directory=photos.root), name="photos")
    # registered last so every unmatched path or method ends up here
    app.add_api_route("/{path:path}", method_not_allowed, methods=ALL_METHODS, include_in_schema=False)

    logger.info(f"Inventory API configured for {settings.base_url} with photos in {photos.root}")
    return app
