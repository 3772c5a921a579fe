"""
Ordered TLS option lists.

TLS engine options are kept as an ordered association list rather than a
dict: concatenating two lists keeps every entry, and a lookup returns the
first occurrence. Putting provider options in front of the base options is
therefore enough to let them take precedence.
"""
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

OptionPair = Tuple[str, Any]
OptionsLike = Union["OptionList", Mapping[str, Any], Iterable[OptionPair]]

_MISSING = object()


class OptionList:
    """Immutable ordered list of ``(key, value)`` TLS options."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[OptionPair] = ()):
        pairs = []
        for item in items:
            try:
                key, value = item
            except (TypeError, ValueError):
                raise TypeError(f"TLS option must be a (key, value) pair, got {item!r}")
            if not isinstance(key, str):
                raise TypeError(f"TLS option key must be a string, got {key!r}")
            pairs.append((key, value))
        self._items: Tuple[OptionPair, ...] = tuple(pairs)

    @classmethod
    def coerce(cls, value: Optional[OptionsLike]) -> "OptionList":
        """Build an OptionList from an OptionList, a mapping, or a pair sequence."""
        if value is None:
            return cls()
        if isinstance(value, OptionList):
            return value
        if isinstance(value, Mapping):
            return cls(value.items())
        if isinstance(value, (str, bytes)):
            raise TypeError(f"TLS options must be pairs or a mapping, got {value!r}")
        return cls(value)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first entry for ``key``."""
        for k, v in self._items:
            if k == key:
                return v
        return default

    def get_first(self, *keys: str, default: Any = None) -> Any:
        """Return the value of the first key (in argument order) that is present."""
        for key in keys:
            value = self.get(key, _MISSING)
            if value is not _MISSING:
                return value
        return default

    def get_all(self, key: str) -> List[Any]:
        return [v for k, v in self._items if k == key]

    def keys(self) -> List[str]:
        """Distinct keys in first-occurrence order."""
        seen: List[str] = []
        for k, _ in self._items:
            if k not in seen:
                seen.append(k)
        return seen

    def pop(self, key: str, default: Any = None) -> Tuple[Any, "OptionList"]:
        """Return the first value for ``key`` and a list with every ``key`` entry removed."""
        return self.get(key, default), self.without(key)

    def without(self, *keys: str) -> "OptionList":
        return OptionList((k, v) for k, v in self._items if k not in keys)

    def as_dict(self) -> dict:
        """Collapse to a dict where the first occurrence of each key wins."""
        result: dict = {}
        for k, v in self._items:
            if k not in result:
                result[k] = v
        return result

    def __add__(self, other: OptionsLike) -> "OptionList":
        return OptionList(self._items + OptionList.coerce(other)._items)

    def __radd__(self, other: OptionsLike) -> "OptionList":
        return OptionList(OptionList.coerce(other)._items + self._items)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._items)

    def __iter__(self) -> Iterator[OptionPair]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OptionList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return list(self._items) == [
                tuple(item) if isinstance(item, list) else item for item in other
            ]
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"OptionList({list(self._items)!r})"
