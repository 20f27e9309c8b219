"""
bulk_import/connectors package marker.
"""

from bulk_import.connectors.bulk_upload_client import (
    BulkUploadClient,
    BulkUploadError,
    BulkUploadTimeoutError,
    BulkUploadTransportError,
    TemplateDownloadError,
)

__all__ = [
    "BulkUploadClient",
    "BulkUploadError",
    "BulkUploadTimeoutError",
    "BulkUploadTransportError",
    "TemplateDownloadError",
]
