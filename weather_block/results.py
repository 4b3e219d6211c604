from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .providers.base import BlockError


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a tagged :class:`BlockError`, never both."""

    value: Optional[T] = None
    error: Optional[BlockError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BlockError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None


__all__ = ["Result"]
