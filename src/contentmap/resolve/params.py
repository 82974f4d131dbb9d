"""Parameter extraction and entry filtering.

Content items are read through dotted field paths such as ``sys.updatedAt``
or ``fields.slug.en-US``; numeric segments index into lists
(``fields.tags.0``).  A path that runs into a missing key, a ``None`` value
or a non-container is absent.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from contentmap._types import ContentItem, FieldPath, ParameterSet
    from contentmap.config import RouteTemplate


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


_SCALARS: Final = (str, bytes, int, float, bool)


def get_path(item: ContentItem, path: FieldPath, default: Any = MISSING) -> Any:
    """Read a dotted field path out of a content item.

    Mappings are read by key, lists by index, and any other object by
    attribute, so SDK entry objects resolve the same way as JSON payloads.
    Returns ``default`` (``MISSING`` unless given) when any segment is
    absent or the final value is ``None``.
    """
    current = item
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return default
        elif isinstance(current, _SCALARS):
            return default
        else:
            current = getattr(current, segment, None)
        if current is None:
            return default
    return current


def is_record(item: Any) -> bool:
    """True for non-empty mappings or objects carrying attributes."""
    if isinstance(item, Mapping):
        return len(item) > 0
    if item is None or isinstance(item, (*_SCALARS, Sequence)):
        return False
    if getattr(item, "__dict__", None):
        return True
    return any(hasattr(item, name) for name in getattr(type(item), "__slots__", ()))


def extract_params(
    item: ContentItem,
    param_paths: Mapping[str, FieldPath] | None,
    base_params: Mapping[str, Any] | None = None,
) -> ParameterSet:
    """Build the parameter set for one item.

    Seeds the result with ``base_params`` (e.g., the default locale), then
    adds each declared ``name -> path`` value found on the item.  Absent
    values leave the name out of the result.  Seeded names are never
    overwritten by extraction.
    """
    params: ParameterSet = dict(base_params or {})
    if not param_paths:
        return params
    for name, path in param_paths.items():
        if name in params:
            continue
        value = get_path(item, path)
        if value is not MISSING:
            params[name] = value
    return params


def unsatisfied_reason(
    item: ContentItem,
    template: RouteTemplate,
    required: Iterable[str],
    base_params: Mapping[str, Any] | None = None,
) -> str | None:
    """Explain why ``item`` cannot produce a URL for ``template``.

    Returns *None* when the item satisfies the template: every declared
    field path holds a truthy value, and every name the pattern requires
    resolves to a truthy value in the item's parameter set.
    """
    if not is_record(item):
        return "item is empty or not a record"

    if template.params:
        for name, path in template.params.items():
            if not get_path(item, path):
                return f"field {path!r} for parameter {name!r} is missing or empty"

    params = extract_params(item, template.params, base_params)
    for name in sorted(required):
        if not params.get(name):
            return f"pattern parameter {name!r} is not supplied"

    return None


def is_route_satisfiable(
    item: ContentItem,
    template: RouteTemplate,
    required: Iterable[str],
    base_params: Mapping[str, Any] | None = None,
) -> bool:
    """True when ``item`` can produce a URL for ``template``."""
    return unsatisfied_reason(item, template, required, base_params) is None
