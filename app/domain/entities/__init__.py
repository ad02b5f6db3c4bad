"""Domain entities exposed by the application."""

from .default_attachment import DefaultAttachment, DefaultAttachmentPage
from .provisioning_result import TenantProvisioningResult

__all__ = [
    "DefaultAttachment",
    "DefaultAttachmentPage",
    "TenantProvisioningResult",
]
