"""A list whose network request runs the first time it is consumed."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Iterator, TypeVar, overload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LazySequence(Generic[T]):
    """Wraps a listing call and defers it until the result is needed.

    The producer runs at most once per instance. Iterating, indexing, ``len()``,
    ``in``, truthiness, :meth:`first`, :meth:`to_list` and :meth:`eager` all
    share the one materialized result. Ask the owning namespace for a new
    sequence to see server-side changes.

    If the producer raises, the error propagates to whoever consumed the
    sequence first, and every later consumption raises it again without
    calling the producer.
    """

    def __init__(self, producer: Callable[[], Iterable[T]]) -> None:
        self._producer = producer
        self._items: list[T] | None = None
        self._error: BaseException | None = None

    @property
    def materialized(self) -> bool:
        return self._items is not None

    def eager(self) -> LazySequence[T]:
        """Run the listing call now if it has not run yet. An empty result is fine."""
        self._materialize()
        return self

    def first(self) -> T | None:
        """Return the first item, or None if the sequence is empty."""
        items = self._materialize()
        return items[0] if items else None

    def to_list(self) -> list[T]:
        return list(self._materialize())

    def _materialize(self) -> list[T]:
        if self._items is not None:
            return self._items
        if self._error is not None:
            raise self._error
        try:
            items = list(self._producer())
        except Exception as exc:
            self._error = exc
            raise
        logger.debug("Materialized %d items", len(items))
        self._items = items
        return items

    def __iter__(self) -> Iterator[T]:
        return iter(self._materialize())

    def __len__(self) -> int:
        return len(self._materialize())

    def __bool__(self) -> bool:
        return bool(self._materialize())

    def __contains__(self, item: object) -> bool:
        return item in self._materialize()

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._materialize()[index]

    def __repr__(self) -> str:
        if self._items is None:
            return "<LazySequence (pending)>"
        return f"<LazySequence {self._items!r}>"
