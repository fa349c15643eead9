"""Async HTTP executor for the storage service."""

import json
import os
import time
from typing import Any, BinaryIO

import httpx
import structlog

from src.fetch.config import FetchConfig
from src.fetch.constants import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
    HEADER_UPSERT,
    HTTP_METHOD_DELETE,
    HTTP_METHOD_GET,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    MULTIPART_CACHE_CONTROL_FIELD,
    MULTIPART_FILE_FIELD,
)
from src.fetch.errors import to_storage_error
from src.fetch.metrics import FetchMetrics
from src.fetch.mime import (
    MimeLookup,
    guess_content_type,
    resolve_content_type,
    url_lookup_path,
)
from src.fetch.models import (
    FailureKind,
    FetchOptions,
    FileOptions,
    RequestFailure,
    StorageResponse,
)
from src.fetch.multipart import encode_multipart, multipart_content_type
from src.fetch.redact import redact_headers, redact_url_credentials


logger = structlog.get_logger()

FileSource = str | os.PathLike[str] | BinaryIO


class StorageFetcher:
    """Single-shot HTTP executor returning uniform StorageResponse results.

    Sends JSON requests, multipart file uploads, and multipart binary
    uploads. Every outcome, including network errors, non-2xx statuses,
    and malformed bodies, is returned as a StorageResponse; no public
    method raises.

    The transport is injectable: pass an ``httpx.AsyncClient`` (for
    example one built on ``httpx.MockTransport``) to reuse a connection
    pool, or omit it to open a short-lived client per call from
    FetchConfig.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        client: httpx.AsyncClient | None = None,
        mime_lookup: MimeLookup = guess_content_type,
        metrics: FetchMetrics | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Transport defaults and default headers.
            client: Caller-owned async client; never closed by the fetcher.
            mime_lookup: Content-type lookup for upload parts.
            metrics: Metrics sink (defaults to the process-wide instance).
        """
        self._config = config or FetchConfig()
        self._client = client
        self._mime_lookup = mime_lookup
        self._metrics = metrics or FetchMetrics.get_instance()
        self._log = logger.bind(component="fetch")

    async def get(
        self, url: str, options: FetchOptions | None = None
    ) -> StorageResponse[Any]:
        """Send a GET request."""
        return await self._json_request(HTTP_METHOD_GET, url, None, options)

    async def post(
        self, url: str, body: Any, options: FetchOptions | None = None
    ) -> StorageResponse[Any]:
        """Send a POST request with a JSON body."""
        return await self._json_request(HTTP_METHOD_POST, url, body, options)

    async def put(
        self, url: str, body: Any, options: FetchOptions | None = None
    ) -> StorageResponse[Any]:
        """Send a PUT request with a JSON body."""
        return await self._json_request(HTTP_METHOD_PUT, url, body, options)

    async def delete(
        self, url: str, body: Any = None, options: FetchOptions | None = None
    ) -> StorageResponse[Any]:
        """Send a DELETE request with a JSON body."""
        return await self._json_request(HTTP_METHOD_DELETE, url, body, options)

    async def post_file(
        self,
        url: str,
        file: FileSource,
        file_options: FileOptions,
        options: FetchOptions | None = None,
    ) -> StorageResponse[Any]:
        """Upload a local file as multipart with POST."""
        return await self._file_request(
            HTTP_METHOD_POST, url, file, file_options, options
        )

    async def put_file(
        self,
        url: str,
        file: FileSource,
        file_options: FileOptions,
        options: FetchOptions | None = None,
    ) -> StorageResponse[Any]:
        """Upload a local file as multipart with PUT."""
        return await self._file_request(
            HTTP_METHOD_PUT, url, file, file_options, options
        )

    async def post_binary_file(
        self,
        url: str,
        data: bytes,
        file_options: FileOptions,
        options: FetchOptions | None = None,
    ) -> StorageResponse[Any]:
        """Upload raw bytes as multipart with POST."""
        return await self._binary_request(
            HTTP_METHOD_POST, url, data, file_options, options
        )

    async def put_binary_file(
        self,
        url: str,
        data: bytes,
        file_options: FileOptions,
        options: FetchOptions | None = None,
    ) -> StorageResponse[Any]:
        """Upload raw bytes as multipart with PUT."""
        return await self._binary_request(
            HTTP_METHOD_PUT, url, data, file_options, options
        )

    async def _json_request(
        self,
        method: str,
        url: str,
        body: Any,
        options: FetchOptions | None,
    ) -> StorageResponse[Any]:
        """Build and send a JSON request.

        Non-GET requests always carry ``Content-Type: application/json``,
        overriding any caller-supplied value. GET sends no body.
        """
        options = options or FetchOptions()
        headers = self._merge_headers(options)
        content: bytes | None = None

        if method != HTTP_METHOD_GET:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
            try:
                content = json.dumps({} if body is None else body).encode("utf-8")
            except (TypeError, ValueError, RecursionError) as exc:
                return self._fail(
                    method, url, RequestFailure.from_exception(FailureKind.LOCAL, exc)
                )

        return await self._execute(
            method, url, options, headers=headers, content=content
        )

    async def _file_request(
        self,
        method: str,
        url: str,
        file: FileSource,
        file_options: FileOptions,
        options: FetchOptions | None,
    ) -> StorageResponse[Any]:
        """Read a file fully and upload it as a multipart part."""
        try:
            filename, payload = _read_file(file)
            content_type = resolve_content_type(self._mime_lookup, filename)
        except Exception as exc:  # noqa: BLE001
            return self._fail(
                method, url, RequestFailure.from_exception(FailureKind.LOCAL, exc)
            )

        return await self._multipart_request(
            method, url, filename, payload, content_type, file_options, options
        )

    async def _binary_request(
        self,
        method: str,
        url: str,
        data: bytes,
        file_options: FileOptions,
        options: FetchOptions | None,
    ) -> StorageResponse[Any]:
        """Upload raw bytes as a multipart part with an empty filename.

        Raw bytes carry no path, so the content type is guessed from the
        destination URL's extension.
        """
        try:
            content_type = resolve_content_type(
                self._mime_lookup, url_lookup_path(url)
            )
        except Exception as exc:  # noqa: BLE001
            return self._fail(
                method, url, RequestFailure.from_exception(FailureKind.LOCAL, exc)
            )

        return await self._multipart_request(
            method, url, "", bytes(data), content_type, file_options, options
        )

    async def _multipart_request(
        self,
        method: str,
        url: str,
        filename: str,
        payload: bytes,
        content_type: str,
        file_options: FileOptions,
        options: FetchOptions | None,
    ) -> StorageResponse[Any]:
        """Send a multipart request with one file part and cacheControl."""
        options = options or FetchOptions()
        headers = self._merge_headers(options)
        body, boundary = encode_multipart(
            fields={MULTIPART_CACHE_CONTROL_FIELD: file_options.cache_control},
            file_field=MULTIPART_FILE_FIELD,
            filename=filename,
            payload=payload,
            content_type=content_type,
        )
        # The boundary header replaces any caller Content-Type
        headers[HEADER_CONTENT_TYPE] = multipart_content_type(boundary)
        headers[HEADER_UPSERT] = file_options.upsert_header

        return await self._execute(
            method,
            url,
            options,
            headers=headers,
            content=body,
        )

    def _merge_headers(self, options: FetchOptions) -> httpx.Headers:
        """Layer caller headers over the configured defaults.

        Args:
            options: Per-call options.

        Returns:
            New headers; neither the config nor the options are modified.
        """
        headers = self._config.base_headers()
        headers.update(options.headers)
        return headers

    async def _execute(
        self,
        method: str,
        url: str,
        options: FetchOptions,
        **request_kwargs: Any,
    ) -> StorageResponse[Any]:
        """Send the request and convert the outcome into a result.

        Args:
            method: HTTP method.
            url: Target URL.
            options: Per-call options (decoding mode).
            **request_kwargs: Passed to ``httpx.AsyncClient.request``.

        Returns:
            StorageResponse with data or error.
        """
        self._log.debug(
            "request_start",
            method=method,
            url=redact_url_credentials(url),
            headers=redact_headers(request_kwargs.get("headers", {})),
        )
        start_time_ns = time.perf_counter_ns()

        try:
            response = await self._send(method, url, **request_kwargs)
        except httpx.HTTPError as exc:
            return self._fail(
                method, url, RequestFailure.from_exception(FailureKind.TRANSPORT, exc)
            )
        except Exception as exc:  # noqa: BLE001
            return self._fail(
                method, url, RequestFailure.from_exception(FailureKind.LOCAL, exc)
            )

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_request(response.status_code, len(response.content))
        self._metrics.record_duration(duration_ms)

        return self._handle_response(method, url, response, options, duration_ms)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send through the injected client or a short-lived one.

        The response body is fully read before returning.
        """
        if self._client is not None:
            return await self._client.request(method, url, **kwargs)

        async with httpx.AsyncClient(**self._config.client_kwargs()) as client:
            return await client.request(method, url, **kwargs)

    def _handle_response(
        self,
        method: str,
        url: str,
        response: httpx.Response,
        options: FetchOptions,
        duration_ms: float,
    ) -> StorageResponse[Any]:
        """Turn a complete response into data or a tagged failure."""
        if not _is_success_status(response.status_code):
            failure = RequestFailure(
                kind=FailureKind.RESPONSE,
                detail=response.text,
                status_code=response.status_code,
            )
            return self._fail(method, url, failure)

        data: Any
        if options.no_resolve_json:
            data = response.content
        else:
            try:
                data = json.loads(response.text)
            except (ValueError, RecursionError) as exc:
                return self._fail(
                    method, url, RequestFailure.from_exception(FailureKind.DECODE, exc)
                )

        self._log.info(
            "request_complete",
            method=method,
            url=redact_url_credentials(url),
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )
        return StorageResponse.ok(data)

    def _fail(
        self, method: str, url: str, failure: RequestFailure
    ) -> StorageResponse[Any]:
        """Record, log, and normalize a failure."""
        self._metrics.record_failure(failure.kind)
        error = to_storage_error(failure)
        self._log.warning(
            "request_failed",
            method=method,
            url=redact_url_credentials(url),
            failure_kind=failure.kind.value,
            status_code=failure.status_code,
            message=error.message,
        )
        return StorageResponse.fail(error)


def _is_success_status(status_code: int) -> bool:
    return HTTP_STATUS_OK_MIN <= status_code <= HTTP_STATUS_OK_MAX


def _read_file(file: FileSource) -> tuple[str, bytes]:
    """Read an upload source fully into memory.

    Args:
        file: Filesystem path or open binary file object.

    Returns:
        Tuple of (filename, content). File objects without a string
        ``name`` get an empty filename.
    """
    if isinstance(file, str | os.PathLike):
        path = os.fspath(file)
        with open(path, "rb") as fh:
            return path, fh.read()

    name = getattr(file, "name", "")
    return (name if isinstance(name, str) else ""), file.read()
