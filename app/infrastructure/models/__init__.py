"""ORM models used by the application infrastructure."""

from .default_attachment import DefaultAttachmentModel

__all__ = [
    "DefaultAttachmentModel",
]
