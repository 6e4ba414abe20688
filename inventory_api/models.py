"""
SQLAlchemy ORM models for the Inventory API.

Defines the database schema for the inventory table.
"""
from sqlalchemy import Column, Integer, String, Text
from .database import Base

class InventoryItem(Base):
    """
    Inventory item row.

    Attributes:
        id (int): Primary key, serial inventory item ID
        inventory_name (str): Name of the item
        description (str): Free text description
        photo_filename (str): Name of the photo file in the photo directory, if any
        photo_url (str): URL serving the item's photo, if any
    """
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    inventory_name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    photo_filename = Column(String(255), nullable=True)
    photo_url = Column(String(255), nullable=True)
