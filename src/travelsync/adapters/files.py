"""Raw provider documents read from local JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from travelsync.domain.extraction import UnsupportedDocumentError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JsonDocumentSource:
    """Yield documents from a JSON array, a single JSON object, or JSON lines."""

    path: Path

    def __iter__(self) -> Iterator[object]:
        text = self.path.read_text(encoding="utf-8")
        stripped = text.lstrip()
        if not stripped:
            return
        if stripped[0] in "[{":
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                # several objects on separate lines also start with "{"
                yield from self._lines(text)
                return
            if isinstance(decoded, list):
                yield from cast("list[object]", decoded)
            else:
                yield decoded
            return
        yield from self._lines(text)

    def _lines(self, text: str) -> Iterator[object]:
        for number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as exc:
                raise UnsupportedDocumentError(
                    f"{self.path}:{number} is not a JSON document"
                ) from exc


def load_document(path: Path) -> object:
    """Read one raw document; classification is left to the extractor."""

    log.debug("Reading %s", path)
    return path.read_text(encoding="utf-8")
