"""Family-scoped failure isolation for extractors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import ReservationNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


def extract_family[T](family: str, extractor: Callable[[], T], default: Callable[[], T]) -> T:
    """Run one family extractor, degrading to ``default()`` on any failure.

    A missing reservation root is a precondition failure and is re-raised.
    """

    try:
        return extractor()
    except ReservationNotFoundError:
        raise
    except Exception:
        log.warning("Extraction of %s failed; continuing without it", family, exc_info=True)
        return default()
