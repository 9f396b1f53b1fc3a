"""Turn request failures into user-facing error messages."""

from __future__ import annotations

from typing import Any

from filmography.core.messages import MessageKey, TextResolver
from filmography.services.tmdb import FailureKind, TMDbRequestError


def message_key_for(kind: FailureKind, status_code: int | None = None) -> tuple[MessageKey, tuple[Any, ...]]:
    """Return the message key (and its format args) for a tagged failure."""

    if kind is FailureKind.NO_CONNECTION:
        return MessageKey.NO_INTERNET, ()
    if kind is FailureKind.TIMEOUT:
        return MessageKey.TIMEOUT, ()
    if kind is FailureKind.NETWORK:
        return MessageKey.NETWORK_GENERAL, ()
    if kind is FailureKind.HTTP and status_code is not None:
        if status_code == 401:
            return MessageKey.INVALID_API_KEY, ()
        if status_code == 404:
            return MessageKey.NOT_FOUND, ()
        if status_code == 429:
            return MessageKey.TOO_MANY_REQUESTS, ()
        if 500 <= status_code <= 599:
            return MessageKey.SERVER_ERROR, ()
        return MessageKey.HTTP_GENERAL, (status_code,)
    return MessageKey.UNKNOWN, ()


def error_message(resolver: TextResolver, exc: BaseException) -> str:
    """Resolve display text for any exception; untagged ones are "unknown"."""

    if isinstance(exc, TMDbRequestError):
        key, args = message_key_for(exc.kind, exc.status_code)
    else:
        key, args = MessageKey.UNKNOWN, ()
    return resolver.resolve(key, *args)
