"""Ports for sourcing raw provider documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class RawDocumentSource(Protocol):
    """Yields raw provider documents in arrival order."""

    def __iter__(self) -> Iterator[object]: ...
