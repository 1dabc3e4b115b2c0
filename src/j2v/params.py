"""Parameter access for the request builders.

Builders read their inputs by name from a ``ParameterSource``, the same
``get(name, item_index, fallback)`` contract a workflow host exposes. A source
may return the fallback for unknown names or raise; ``lookup`` turns both
outcomes into an explicit ``ParamLookup`` so callers decide per parameter
whether an access failure is fatal.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

_MISSING = object()
_REQUIRED = object()


class ParameterSource(Protocol):
    """Anything that can resolve a named parameter for a workflow item."""

    def get(self, name: str, item_index: int, fallback: Any = None) -> Any:
        ...


@dataclass(frozen=True)
class ParamLookup:
    """Outcome of reading one parameter."""

    name: str
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        """Return True if the source answered without raising."""
        return self.error is None

    def value_or(self, default: Any) -> Any:
        """Return the value, or ``default`` if the access failed."""
        if self.error is not None:
            return default
        return self.value


def lookup(
    source: ParameterSource,
    name: str,
    item_index: int = 0,
    fallback: Any = None,
) -> ParamLookup:
    """Read a parameter without letting source errors escape.

    Args:
        source: Parameter source to query.
        name: Dotted parameter path, e.g. ``scenes.sceneValues``.
        item_index: Workflow item being compiled.
        fallback: Value the source should return when the name is unknown.

    Returns:
        A ParamLookup holding either the value or the raised exception.
    """
    try:
        return ParamLookup(name=name, value=source.get(name, item_index, fallback))
    except Exception as e:
        logger.debug(f"Parameter '{name}' unavailable for item {item_index}: {e}")
        return ParamLookup(name=name, value=fallback, error=e)


def get_collection(
    source: ParameterSource,
    name: str,
    item_index: int = 0,
) -> List[Any]:
    """Read a list-valued parameter, treating access failures as empty.

    Non-list values are treated as absent as well.
    """
    result = lookup(source, name, item_index, [])
    if not result.ok:
        logger.warning(
            f"Could not read '{name}' for item {item_index}, treating it as empty: "
            f"{result.error}"
        )
        return []
    value = result.value
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def resolve_path(data: Mapping[str, Any], name: str, default: Any = _REQUIRED) -> Any:
    """Resolve ``a.b.c`` against nested mappings.

    A flat key containing the dots wins over traversal, so both
    ``{"scenes.sceneValues": [...]}`` and ``{"scenes": {"sceneValues": [...]}}``
    resolve the same name.
    """
    if name in data:
        return data[name]

    current: Any = data
    for part in name.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            if default is _REQUIRED:
                raise KeyError(name)
            return default
    return current


class DictParameterSource:
    """Parameter source backed by one parameter tree per workflow item."""

    def __init__(self, items: Sequence[Mapping[str, Any]]) -> None:
        """Initialize the source.

        Args:
            items: One parameter mapping per workflow item.
        """
        self._items = list(items)

    @classmethod
    def single(cls, params: Mapping[str, Any]) -> "DictParameterSource":
        """Build a source holding a single item."""
        return cls([params])

    def __len__(self) -> int:
        return len(self._items)

    def get(self, name: str, item_index: int = 0, fallback: Any = None) -> Any:
        """Return the named parameter for an item, or ``fallback``.

        Raises:
            IndexError: If ``item_index`` does not address an item.
        """
        if item_index < 0 or item_index >= len(self._items):
            raise IndexError(
                f"Item index {item_index} out of range ({len(self._items)} items)"
            )
        value = resolve_path(self._items[item_index], name, _MISSING)
        if value is _MISSING:
            return fallback
        return value
