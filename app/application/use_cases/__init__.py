"""Aggregate application use cases."""

from .default_attachments import (
    create_default_attachment,
    delete_default_attachment,
    get_default_attachment,
    list_default_attachments,
    search_default_attachments,
    update_default_attachment,
)

__all__ = [
    "create_default_attachment",
    "delete_default_attachment",
    "get_default_attachment",
    "list_default_attachments",
    "search_default_attachments",
    "update_default_attachment",
]
