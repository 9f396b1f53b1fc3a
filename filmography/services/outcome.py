"""Success/failure values returned by the repository instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """A classified failure; ``message`` is ready for display."""

    message: str


Outcome = Union[Success[T], Failure]
