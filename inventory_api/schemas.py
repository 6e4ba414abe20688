"""
Pydantic schemas for request/response validation in the Inventory API.

These schemas define the structure of data for API requests and responses.
"""
from typing import Optional
from pydantic import BaseModel

class InventoryItemBase(BaseModel):
    """Base schema with common inventory item attributes."""
    inventory_name: str
    description: str = ""

class InventoryItemCreate(InventoryItemBase):
    """Schema for creating a new inventory item, optionally with a stored photo."""
    photo_filename: Optional[str] = None

class InventoryItemUpdate(BaseModel):
    """
    Schema for updating an existing inventory item. All fields are optional.

    Empty values are treated as not provided and leave the stored value as is.
    """
    inventory_name: Optional[str] = None
    description: Optional[str] = None

class InventoryItem(InventoryItemBase):
    """
    Schema for inventory item responses, includes all stored fields.

    Attributes:
        id (int): Inventory item's unique identifier
        inventory_name (str): Name of the item
        description (str): Item description
        photo_filename (str): Stored photo file name, or None
        photo_url (str): URL of the item's photo endpoint, or None
    """
    id: int
    description: Optional[str] = ""
    photo_filename: Optional[str] = None
    photo_url: Optional[str] = None

    class Config:
        from_attributes = True

class Message(BaseModel):
    """Success body for write operations."""
    message: str

class Error(BaseModel):
    """Body of every error response."""
    error: str
