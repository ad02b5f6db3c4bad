"""Use cases for managing default attachment requirements."""

from .create_default_attachment import create_default_attachment
from .delete_default_attachment import delete_default_attachment
from .get_default_attachment import get_default_attachment
from .list_default_attachments import list_default_attachments
from .search_default_attachments import search_default_attachments
from .update_default_attachment import update_default_attachment

__all__ = [
    "create_default_attachment",
    "delete_default_attachment",
    "get_default_attachment",
    "list_default_attachments",
    "search_default_attachments",
    "update_default_attachment",
]
