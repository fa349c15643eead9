"""HTTP constants for the storage fetch layer.

Centralizes status ranges, header names and upload defaults shared across
modules.
"""

# HTTP Status Code Range (inclusive on both ends)
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 299

# Methods
HTTP_METHOD_GET = "GET"
HTTP_METHOD_POST = "POST"
HTTP_METHOD_PUT = "PUT"
HTTP_METHOD_DELETE = "DELETE"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_UPSERT = "x-upsert"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FALLBACK = "application/octet-stream"

# Multipart layout expected by the storage server
MULTIPART_FILE_FIELD = ""
MULTIPART_CACHE_CONTROL_FIELD = "cacheControl"

# Upload defaults
DEFAULT_CACHE_CONTROL = "3600"
DEFAULT_USER_AGENT = "storage-fetch/0.1"
