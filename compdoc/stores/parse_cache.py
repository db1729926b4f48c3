"""In-process cache of parsed source representations."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Tuple, TypeVar

T = TypeVar("T")


class ParseCache:
    """Stores parsed representations keyed by representation kind and file path.

    Each ``(kind, path)`` pair is parsed at most once for the lifetime of the
    cache. There is no invalidation: a stale entry is only dropped by
    building a new cache (in practice, a new process).
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, Hashable], object] = {}
        self.hits = 0
        self.misses = 0

    def get_or_parse(self, kind: str, path: Hashable, parse: Callable[[], T]) -> T:
        key = (kind, path)
        if key in self._entries:
            self.hits += 1
            return self._entries[key]  # type: ignore[return-value]
        self.misses += 1
        value = parse()
        self._entries[key] = value
        return value

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ParseCache"]
