"""Data models for the storage fetch layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.fetch.constants import DEFAULT_CACHE_CONTROL


DataT = TypeVar("DataT")


class FetchOptions(BaseModel):
    """Per-call request options.

    Attributes:
        headers: Headers merged over the fetcher's default headers.
        no_resolve_json: Return the raw body bytes instead of decoded JSON.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    headers: dict[str, str] = Field(default_factory=dict)
    no_resolve_json: bool = False


class FileOptions(BaseModel):
    """Upload metadata sent alongside a multipart file part."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cache_control: str = DEFAULT_CACHE_CONTROL
    upsert: bool = False

    @property
    def upsert_header(self) -> str:
        """Wire form of the upsert flag ("true" / "false")."""
        return "true" if self.upsert else "false"


class StorageError(BaseModel):
    """Error reported by the storage server or synthesized from a failure.

    The server reports errors as ``{"message", "error", "statusCode"}``;
    anything else is carried through as ``message`` alone.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    message: Annotated[str, Field(min_length=1)]
    error: str | None = None
    status_code: str | None = Field(default=None, alias="statusCode")

    @field_validator("error", "status_code", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> str | None:
        """Accept numeric codes from servers that send ``statusCode: 404``."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def __str__(self) -> str:
        return self.message


class StorageResponse(BaseModel, Generic[DataT]):
    """Result of a storage request: data or error, never both.

    ``data`` may legitimately be ``None`` on success when the server
    returned a JSON ``null`` body, so ``has_error`` is the only branch
    callers should rely on.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: DataT | None = None
    error: StorageError | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "StorageResponse[DataT]":
        """Reject results carrying both data and an error."""
        if self.data is not None and self.error is not None:
            msg = "StorageResponse cannot carry both data and error"
            raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, data: DataT | None) -> "StorageResponse[DataT]":
        """Build a successful result."""
        return cls(data=data)

    @classmethod
    def fail(cls, error: StorageError) -> "StorageResponse[DataT]":
        """Build a failed result."""
        return cls(error=error)

    @property
    def has_error(self) -> bool:
        """Whether the request failed."""
        return self.error is not None


class FailureKind(str, Enum):
    """Classification of request failures.

    - RESPONSE: Server answered with a non-2xx status
    - TRANSPORT: Network or protocol error raised by the HTTP client
    - DECODE: 2xx response whose body is not valid JSON
    - LOCAL: Request could not be built (file, MIME lookup, body encoding)
    """

    RESPONSE = "RESPONSE"
    TRANSPORT = "TRANSPORT"
    DECODE = "DECODE"
    LOCAL = "LOCAL"


@dataclass(frozen=True)
class RequestFailure:
    """Tagged failure routed to error normalization.

    Attributes:
        kind: Failure classification.
        detail: Response body text for RESPONSE, exception text otherwise.
        status_code: HTTP status for RESPONSE failures.
    """

    kind: FailureKind
    detail: str
    status_code: int | None = None

    @classmethod
    def from_exception(cls, kind: FailureKind, exc: BaseException) -> "RequestFailure":
        """Build a failure from a caught exception.

        Falls back to the exception class name when its text is empty.
        """
        return cls(kind=kind, detail=str(exc) or type(exc).__name__)
