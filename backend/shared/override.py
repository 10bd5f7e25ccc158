"""
Override chain for resolving an effective configuration value.

Several places resolve a value from an ordered list of optional sources
(widget setting, then the owner's global setting, then the environment
default). The first non-empty source wins; later sources are not consulted.
"""

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


def _is_empty(value: object) -> bool:
    return value is None or value == ""


class OverrideChain(Generic[T]):
    """
    Ordered precedence list of optional sources.

    Sources may be plain values or zero-argument callables. Callables are
    evaluated lazily, in order, and only until a non-empty value is found,
    so an expensive lookup (e.g. a database query) runs only when every
    higher-priority source was empty.

    Each source may carry a label so callers can report which level
    supplied the value.

    Example:
        key = OverrideChain[str]()
        key.add(widget.retell_api_key, "widget")
        key.add_lazy(lambda: profiles.get_provider_api_key(widget.user_id), "profile")
        key.add(settings.retell_api_key, "default")
        value, source = key.resolve_with_source()
    """

    def __init__(self) -> None:
        self._sources: list[tuple[Callable[[], Optional[T]], Optional[str]]] = []

    def add(self, value: Optional[T], label: Optional[str] = None) -> "OverrideChain[T]":
        """Append an eagerly known value (lowest priority so far)."""
        self._sources.append((lambda: value, label))
        return self

    def add_lazy(
        self,
        source: Callable[[], Optional[T]],
        label: Optional[str] = None,
    ) -> "OverrideChain[T]":
        """Append a source evaluated only if all previous ones are empty."""
        self._sources.append((source, label))
        return self

    def resolve_with_source(self) -> tuple[Optional[T], Optional[str]]:
        """Return the first non-empty value and its label, or (None, None)."""
        for source, label in self._sources:
            value = source()
            if not _is_empty(value):
                return value, label
        return None, None

    def resolve(self) -> Optional[T]:
        """Return the first non-empty value, or None if every source is empty."""
        value, _ = self.resolve_with_source()
        return value

    def __len__(self) -> int:
        return len(self._sources)


def first_set(*values: Optional[T]) -> Optional[T]:
    """Return the first value that is neither None nor an empty string."""
    chain: OverrideChain[T] = OverrideChain()
    for value in values:
        chain.add(value)
    return chain.resolve()
