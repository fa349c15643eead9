"""HTTP transport helper for the storage service.

This module provides single-shot storage requests with:
- JSON requests (GET/POST/PUT/DELETE)
- Multipart file and raw-binary uploads
- Uniform StorageResponse results; failures never raise
- Header redaction for logging
- Metrics collection for observability
"""

from src.fetch.client import StorageFetcher
from src.fetch.config import FetchConfig
from src.fetch.constants import (
    CONTENT_TYPE_FALLBACK,
    CONTENT_TYPE_JSON,
    DEFAULT_CACHE_CONTROL,
    HEADER_UPSERT,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    MULTIPART_CACHE_CONTROL_FIELD,
)
from src.fetch.errors import to_storage_error
from src.fetch.metrics import FetchMetrics
from src.fetch.mime import MimeLookup, guess_content_type
from src.fetch.models import (
    FailureKind,
    FetchOptions,
    FileOptions,
    RequestFailure,
    StorageError,
    StorageResponse,
)
from src.fetch.redact import redact_headers, redact_url_credentials


__all__ = [
    # Client
    "StorageFetcher",
    # Config
    "FetchConfig",
    # Models
    "FetchOptions",
    "FileOptions",
    "StorageError",
    "StorageResponse",
    "FailureKind",
    "RequestFailure",
    # Errors
    "to_storage_error",
    # MIME
    "MimeLookup",
    "guess_content_type",
    # Constants
    "HTTP_STATUS_OK_MIN",
    "HTTP_STATUS_OK_MAX",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_FALLBACK",
    "DEFAULT_CACHE_CONTROL",
    "HEADER_UPSERT",
    "MULTIPART_CACHE_CONTROL_FIELD",
    # Metrics
    "FetchMetrics",
    # Redaction
    "redact_headers",
    "redact_url_credentials",
]
