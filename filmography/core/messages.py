"""User-facing message keys and the text resolver that turns them into copy."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol


class MessageKey(str, Enum):
    NO_INTERNET = "error_no_internet_connection"
    TIMEOUT = "error_network_timeout"
    NETWORK_GENERAL = "error_network_general"
    INVALID_API_KEY = "error_invalid_api_key"
    NOT_FOUND = "error_resource_not_found"
    TOO_MANY_REQUESTS = "error_too_many_requests"
    SERVER_ERROR = "error_server_error"
    HTTP_GENERAL = "error_http_general"
    UNKNOWN = "error_unknown"
    UNKNOWN_YEAR = "unknown_year"


class TextResolver(Protocol):
    """Anything that can render a message key (plus format args) as display text."""

    def resolve(self, key: MessageKey, *args: Any) -> str: ...


ENGLISH_CATALOG: dict[MessageKey, str] = {
    MessageKey.NO_INTERNET: "No internet connection. Please check your network and try again.",
    MessageKey.TIMEOUT: "The request timed out. Please try again.",
    MessageKey.NETWORK_GENERAL: "A network error occurred. Please try again.",
    MessageKey.INVALID_API_KEY: "Invalid API key. Please check the app configuration.",
    MessageKey.NOT_FOUND: "The requested resource was not found.",
    MessageKey.TOO_MANY_REQUESTS: "Too many requests. Please wait a moment and try again.",
    MessageKey.SERVER_ERROR: "The server is having trouble right now. Please try again later.",
    MessageKey.HTTP_GENERAL: "Request failed with HTTP error {0}.",
    MessageKey.UNKNOWN: "An unexpected error occurred.",
    MessageKey.UNKNOWN_YEAR: "Unknown",
}


class CatalogTextResolver:
    """Resolve keys from ``str.format`` templates; keys missing from *catalog* use English."""

    def __init__(self, catalog: Mapping[MessageKey, str] | None = None) -> None:
        self.catalog = {**ENGLISH_CATALOG, **(catalog or {})}

    def resolve(self, key: MessageKey, *args: Any) -> str:
        template = self.catalog[key]
        return template.format(*args) if args else template
