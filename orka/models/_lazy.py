"""Base class for remote objects that load their data on first use."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Union

from ..exceptions import ResourceNotFoundError

if TYPE_CHECKING:
    from .._http import Connection, Request

logger = logging.getLogger(__name__)


class LoadState(enum.Enum):
    """Where a lazily-loaded object is in its lifecycle."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    DEAD = "dead"


class lazy_attr:
    """An attribute whose value comes from the remote entity.

    Reading it loads the owning object first if it has not been loaded yet.
    """

    def __init__(self, doc: str | None = None) -> None:
        self.__doc__ = doc
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: LazyModel | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        instance._ensure_loaded()
        return instance._attributes[self.name]

    def __set__(self, instance: LazyModel, value: Any) -> None:
        raise AttributeError(f"{self.name!r} is read-only; use refresh() to re-fetch it")


class LazyModel:
    """A handle to a named entity in the Orka backend.

    Creating one never touches the network. The first time a lazy attribute is
    read (or :meth:`eager` is called) the entity is fetched by its key and every
    attribute is cached. :meth:`refresh` re-fetches unconditionally.

    If a fetch finds no entity with this key the object becomes dead, and every
    later access raises :class:`ResourceNotFoundError` without going back to
    the server. Other failures leave the previous snapshot untouched.

    Subclasses describe how to fetch themselves:

    - ``_fetch_request()`` builds the listing or detail request, including its
      credential requirement.
    - ``_entries_field`` names the list in the response body to scan.
    - ``_match_field`` names the field compared against the key.
    - ``_deserialize(entry)`` turns the matching entry into attribute values.
    """

    _resource_name: ClassVar[str] = "resource"
    _entries_field: ClassVar[str] = ""
    _match_field: ClassVar[str] = ""

    def __init__(self, key: str, *, conn: Connection, data: dict[str, Any] | None = None) -> None:
        self._key = key
        self._conn = conn
        self._state = LoadState.UNLOADED
        self._attributes: dict[str, Any] = {}
        self._dead_message: str | None = None
        if data is not None:
            self._attributes = self._deserialize(data)
            self._state = LoadState.LOADED

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, conn: Connection, **kwargs: Any) -> Any:
        """Build an already-loaded object from an entry of a listing response."""
        return cls(data[cls._match_field], conn=conn, data=data, **kwargs)

    @property
    def key(self) -> str:
        return self._key

    @property
    def load_state(self) -> LoadState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state is LoadState.LOADED

    def eager(self) -> Any:
        """Load this object now if it has not been loaded yet.

        Returns:
            The object itself, for chaining.
        """
        self._ensure_loaded()
        return self

    def refresh(self) -> None:
        """Re-fetch this object's data, replacing every cached attribute.

        Raises:
            ResourceNotFoundError: If the entity no longer exists. The object
                is dead from then on.
        """
        self._raise_if_dead()
        self._load()

    def _ensure_loaded(self) -> None:
        self._raise_if_dead()
        if self._state is LoadState.UNLOADED:
            self._load()

    def _raise_if_dead(self) -> None:
        if self._state is LoadState.DEAD:
            raise ResourceNotFoundError(self._dead_message)

    def _load(self) -> None:
        logger.debug("Loading %s %r", self._resource_name, self._key)
        try:
            entry = self._fetch()
        except ResourceNotFoundError as exc:
            self._state = LoadState.DEAD
            self._attributes = {}
            self._dead_message = str(exc)
            raise
        attributes = self._deserialize(entry)
        self._attributes = attributes
        self._state = LoadState.LOADED

    def _fetch(self) -> dict[str, Any]:
        body = self._conn.send(self._fetch_request())
        for entry in self._extract_entries(body):
            if entry.get(self._match_field) == self._key:
                return entry
        raise ResourceNotFoundError(f'No {self._resource_name} found matching "{self._key}".')

    def _extract_entries(self, body: Any) -> Iterable[dict[str, Any]]:
        return body.get(self._entries_field) or []

    def _fetch_request(self) -> Request:
        raise NotImplementedError

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def _update_cached(self, **values: Any) -> None:
        """Reflect a change this client made, if the object is already loaded."""
        if self._state is LoadState.LOADED:
            self._attributes.update(values)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._key!r} ({self._state.value})>"


KeyLike = Union[LazyModel, str, None]


def key_of(value: KeyLike) -> str | None:
    """Accept either a model object or its plain name/email."""
    if isinstance(value, LazyModel):
        return value.key
    return value
