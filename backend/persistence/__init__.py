"""Client-local persistence for settings and user dictionaries."""
from .local_store import LocalStore

__all__ = ["LocalStore"]
