"""Normalization of request failures into StorageError."""

import json

from pydantic import ValidationError

from src.fetch.models import FailureKind, RequestFailure, StorageError


def to_storage_error(failure: RequestFailure) -> StorageError:
    """Convert a tagged request failure into a StorageError.

    RESPONSE failures are parsed as the server's JSON error payload when
    possible and otherwise reported with the raw body text. All other kinds
    report the captured exception text.

    Args:
        failure: Failure produced by the fetcher.

    Returns:
        StorageError with a non-empty message.
    """
    if failure.kind == FailureKind.RESPONSE:
        return _error_from_body(failure.detail, failure.status_code)
    return StorageError(message=failure.detail)


def _error_from_body(body: str, status_code: int | None) -> StorageError:
    """Build a StorageError from a non-2xx response body."""
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        try:
            return StorageError.model_validate(payload)
        except ValidationError:
            # e.g. an empty message string
            pass

    if body:
        return StorageError(message=body)
    return StorageError(message=f"HTTP {status_code}" if status_code else "HTTP error")
