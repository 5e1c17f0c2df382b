# ABOUTME: Public API for the Baserow destination store layer.
# ABOUTME: Exports the REST client, its errors, and the category types.

from wcm.baserow.client import (
    AuthenticationError,
    BaserowClient,
    BaserowError,
    TableNotFoundError,
)
from wcm.baserow.mapping import CategoryLabel, CategorySet

__all__ = [
    "AuthenticationError",
    "BaserowClient",
    "BaserowError",
    "CategoryLabel",
    "CategorySet",
    "TableNotFoundError",
]
