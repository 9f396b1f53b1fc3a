"""Display helpers for poster URLs, ratings, money and release years."""

from __future__ import annotations

from filmography.core.config import get_settings
from filmography.core.messages import MessageKey, TextResolver

POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"


def image_url(path: str | None, size: str = POSTER_SIZE, *, base: str | None = None) -> str:
    """Build a TMDb image URL; blank paths give an empty string."""

    if not path or not path.strip():
        return ""
    image_base = (base or get_settings().tmdb_image_base).rstrip("/")
    return f"{image_base}/{size}{path}"


def poster_url(path: str | None, *, base: str | None = None) -> str:
    return image_url(path, POSTER_SIZE, base=base)


def backdrop_url(path: str | None, *, base: str | None = None) -> str:
    return image_url(path, BACKDROP_SIZE, base=base)


def format_rating(rating: float) -> str:
    return f"{rating:.1f}"


def format_currency(amount: int) -> str:
    """Abbreviate large amounts, e.g. ``1.5B``, ``250.3M``, ``15.2K``."""

    if amount >= 1_000_000_000:
        return f"{amount / 1_000_000_000:.1f}B"
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{amount / 1_000:.1f}K"
    return str(amount)


def extract_year(release_date: str, resolver: TextResolver) -> str:
    if release_date.strip() and len(release_date) >= 4:
        return release_date[:4]
    return resolver.resolve(MessageKey.UNKNOWN_YEAR)
