"""Sabre ``LAST/FIRST TITLE`` name strings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

TITLES: Final[frozenset[str]] = frozenset({"MR", "MRS", "MS", "DR", "MISS", "MSTR", "PROF", "REV"})


@dataclass(frozen=True, slots=True, kw_only=True)
class PersonName:
    last: str | None = None
    first: str | None = None
    title: str | None = None


def split_given_name(given: str | None) -> tuple[str | None, str | None]:
    """Split a trailing title off a given name: ``"JOHN MR"`` -> ``("JOHN", "MR")``."""

    if not given or not given.strip():
        return None, None
    parts = given.split()
    candidate = parts[-1].upper().rstrip(".")
    if len(parts) > 1 and candidate in TITLES:
        return " ".join(parts[:-1]), candidate
    return " ".join(parts), None


def parse_name(text: str | None) -> PersonName:
    if not text or not text.strip():
        return PersonName()
    if "/" not in text:
        return PersonName(last=text.strip())
    last, _, given = text.partition("/")
    first, title = split_given_name(given)
    return PersonName(last=last.strip() or None, first=first, title=title)
