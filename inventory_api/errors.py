"""Exceptions raised by the Inventory API storage layer."""


class StorageError(Exception):
    """A storage backend failed to complete an operation (connectivity, query, ...)."""
