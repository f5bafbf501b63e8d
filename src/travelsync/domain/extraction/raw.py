"""Helpers for reading XML-derived provider trees.

Provider payloads arrive as XML converted to nested mappings: attributes sit under
``$``, element text under ``_``, and any element may be a single mapping or a list
of them. Every read goes through :func:`as_list` / :func:`text_of` so callers never
special-case the singular form.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Final, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

ATTRIBUTES_KEY: Final[str] = "$"
TEXT_KEY: Final[str] = "_"

type Node = Mapping[str, object]
type FieldMap = Mapping[str, tuple[str, ...]]
"""Logical field name -> ordered raw key variants (first non-empty wins)."""


def is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, Mapping)):
        return len(cast("list[object]", value)) == 0
    return False


def as_list(value: object) -> list[object]:
    """Coerce a single-or-many raw value into a list."""

    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in cast("list[object]", value) if item is not None]
    if isinstance(value, tuple):
        return [item for item in cast("tuple[object, ...]", value) if item is not None]
    return [value]


def as_nodes(value: object) -> list[Node]:
    """Like :func:`as_list` but keeps mapping elements only."""

    return [cast("Node", item) for item in as_list(value) if isinstance(item, Mapping)]


def as_node(value: object) -> Node | None:
    nodes = as_nodes(value)
    return nodes[0] if nodes else None


def text_of(value: object) -> str | None:
    """Read a text leaf given either bare or wrapped under ``_``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, Mapping):
        return text_of(cast("Node", value).get(TEXT_KEY))
    if isinstance(value, (list, tuple)):
        for item in as_list(value):
            text = text_of(item)
            if text is not None:
                return text
    return None


def attribute(node: Node | None, *names: str) -> str | None:
    """Return the first non-empty attribute, looking under ``$`` then on the node."""

    if node is None:
        return None
    attrs = node.get(ATTRIBUTES_KEY)
    for name in names:
        if isinstance(attrs, Mapping):
            value = text_of(cast("Node", attrs).get(name))
            if value is not None:
                return value
        value = node.get(name)
        if not isinstance(value, Mapping):
            text = text_of(value)
            if text is not None:
                return text
    return None


def has_attributes(node: Node, names: Iterable[str]) -> bool:
    return any(attribute(node, name) is not None for name in names)


def lookup(node: Node | None, field: str, field_map: FieldMap) -> object | None:
    """Return the first non-empty raw value for ``field`` among its key variants."""

    if node is None:
        return None
    variants = field_map.get(field, (field,))
    for key in variants:
        value = node.get(key)
        if not is_empty(value):
            return value
    return None


def lookup_path(node: Node | None, path: Iterable[str], field_map: FieldMap) -> object | None:
    """Walk ``path`` through single-or-list nodes, taking the first element at each step."""

    current: object | None = node
    for field in path:
        parent = as_node(current)
        if parent is None:
            return None
        current = lookup(parent, field, field_map)
    return current


def lookup_nodes(node: Node | None, path: Iterable[str], field_map: FieldMap) -> list[Node]:
    """Walk ``path`` and collect every mapping at the final step.

    Intermediate lists fan out so ``Segments/Segment`` finds every segment whether
    ``Segments`` is a single element or repeated.
    """

    current: list[Node] = [node] if node is not None else []
    for field in path:
        following: list[Node] = []
        for parent in current:
            following.extend(as_nodes(lookup(parent, field, field_map)))
        current = following
    return current


def lookup_text(node: Node | None, field: str, field_map: FieldMap) -> str | None:
    return text_of(lookup(node, field, field_map))


def to_decimal(value: object) -> Decimal | None:
    text = text_of(value)
    if text is None:
        return None
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None


def to_int(value: object) -> int | None:
    text = text_of(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def to_bool(value: object) -> bool:
    text = text_of(value)
    return text is not None and text.lower() in {"true", "1", "y", "yes"}
