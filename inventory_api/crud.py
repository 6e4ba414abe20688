"""
CRUD (Create, Read, Update, Delete) operations on the inventory table.

This module contains all database operations used by the database storage
backend. Every function takes an open Session and commits its own changes.
"""
from typing import Callable, List, Optional
from sqlalchemy.orm import Session
from . import models, schemas

def get_inventory_item(db: Session, item_id: int) -> Optional[models.InventoryItem]:
    """
    Retrieve a single inventory item by ID.

    Args:
        db: Database session
        item_id: ID of the inventory item to retrieve

    Returns:
        InventoryItem object or None if not found
    """
    return db.query(models.InventoryItem).filter(models.InventoryItem.id == item_id).first()

def get_inventory_items(db: Session) -> List[models.InventoryItem]:
    """
    Retrieve all inventory items, in whatever order the database returns them.

    Args:
        db: Database session

    Returns:
        List of InventoryItem objects
    """
    return db.query(models.InventoryItem).all()

def create_inventory_item(
    db: Session,
    item: schemas.InventoryItemCreate,
    photo_url_for: Optional[Callable[[int], str]] = None,
) -> models.InventoryItem:
    """
    Create a new inventory item in the database.

    When the item has a photo, the row is flushed to obtain its serial ID and
    photo_url is filled in before the single commit, so both photo columns
    become visible together.

    Args:
        db: Database session
        item: Inventory item data to create
        photo_url_for: Builds the photo URL from the new item's ID

    Returns:
        Created InventoryItem object
    """
    db_item = models.InventoryItem(
        inventory_name=item.inventory_name,
        description=item.description or "",
        photo_filename=item.photo_filename,
    )
    db.add(db_item)
    if item.photo_filename and photo_url_for is not None:
        db.flush()
        db_item.photo_url = photo_url_for(db_item.id)
    db.commit()
    db.refresh(db_item)
    return db_item

def update_inventory_item(db: Session, item_id: int, item: schemas.InventoryItemUpdate) -> Optional[models.InventoryItem]:
    """
    Update an existing inventory item.

    Args:
        db: Database session
        item_id: ID of the inventory item to update
        item: Updated item data (only non-empty fields will be updated)

    Returns:
        Updated InventoryItem object or None if not found
    """
    db_item = get_inventory_item(db, item_id)
    if db_item is None:
        return None

    update_data = item.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value:
            setattr(db_item, key, value)

    db.commit()
    db.refresh(db_item)
    return db_item

def update_inventory_item_photo(db: Session, item_id: int, photo_filename: str, photo_url: str) -> Optional[models.InventoryItem]:
    """
    Replace both photo columns of an inventory item.

    Args:
        db: Database session
        item_id: ID of the inventory item
        photo_filename: New photo file name
        photo_url: New photo URL

    Returns:
        Updated InventoryItem object or None if not found
    """
    db_item = get_inventory_item(db, item_id)
    if db_item is None:
        return None

    db_item.photo_filename = photo_filename
    db_item.photo_url = photo_url
    db.commit()
    db.refresh(db_item)
    return db_item

def delete_inventory_item(db: Session, item_id: int) -> Optional[models.InventoryItem]:
    """
    Delete an inventory item from the database.

    Args:
        db: Database session
        item_id: ID of the inventory item to delete

    Returns:
        The deleted item as a detached object, or None if not found
    """
    db_item = get_inventory_item(db, item_id)
    if db_item is None:
        return None

    db.delete(db_item)
    db.commit()
    return db_item
