"""Configuration models for the storage fetch layer."""

from typing import Annotated

import httpx
from pydantic import BaseModel, ConfigDict, Field

from src.fetch.constants import DEFAULT_USER_AGENT, HEADER_USER_AGENT


class FetchConfig(BaseModel):
    """Configuration for the storage fetch layer.

    Holds the transport defaults used when the fetcher opens its own
    client, plus the default headers every request starts from
    (typically API key and authorization for the storage service).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_seconds: float | None = Field(
        default=None,
        ge=1.0,
        le=300.0,
        description="Request timeout; None keeps the transport default",
    )
    follow_redirects: bool = True
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )

    def base_headers(self) -> httpx.Headers:
        """Build the headers every request starts from.

        Returns:
            Case-insensitive headers with the user agent and defaults.
        """
        headers = httpx.Headers({HEADER_USER_AGENT: self.user_agent})
        headers.update(self.default_headers)
        return headers

    def client_kwargs(self) -> dict[str, object]:
        """Keyword arguments for building an httpx.AsyncClient.

        Returns:
            Mapping passed straight to ``httpx.AsyncClient``.
        """
        kwargs: dict[str, object] = {"follow_redirects": self.follow_redirects}
        if self.timeout_seconds is not None:
            kwargs["timeout"] = self.timeout_seconds
        return kwargs
