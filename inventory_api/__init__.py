"""Inventory tracking HTTP service."""
