from .default_attachment import (
    DefaultAttachmentCreate,
    DefaultAttachmentPageRead,
    DefaultAttachmentRead,
    DefaultAttachmentUpdate,
)

__all__ = [
    "DefaultAttachmentCreate",
    "DefaultAttachmentPageRead",
    "DefaultAttachmentRead",
    "DefaultAttachmentUpdate",
]
