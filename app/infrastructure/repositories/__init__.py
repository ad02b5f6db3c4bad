"""Repository implementations for infrastructure layer."""

from .default_attachment_repository import DefaultAttachmentRepository

__all__ = [
    "DefaultAttachmentRepository",
]
