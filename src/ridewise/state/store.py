"""Saved-route store with write-through persistence.

This is the only component allowed to mutate the saved-route collection.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable, Iterator

from pydantic import TypeAdapter, ValidationError

from ridewise._constants import ROUTES_STORAGE_KEY
from ridewise.exceptions import RideWisePersistenceError, RouteValidationError
from ridewise.models.route import SavedRoute
from ridewise.storage import KeyValueStorage

_logger = logging.getLogger(__name__)

_ROUTES_ADAPTER: TypeAdapter[list[SavedRoute]] = TypeAdapter(list[SavedRoute])


def _default_id() -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def dump_routes(routes: tuple[SavedRoute, ...] | list[SavedRoute]) -> str:
    """Serialize routes to the compact JSON array kept in storage."""
    return _ROUTES_ADAPTER.dump_json(list(routes), by_alias=True).decode("utf-8")


def parse_routes(raw: str) -> list[SavedRoute]:
    """Parse the persisted JSON array.

    Raises :class:`ValueError` (including pydantic's ``ValidationError``)
    for anything that is not a list of well-formed routes with unique ids.
    """
    routes = _ROUTES_ADAPTER.validate_json(raw)
    seen: set[str] = set()
    for route in routes:
        if route.id in seen:
            raise ValueError(f"duplicate route id {route.id!r}")
        seen.add(route.id)
    return routes


class RouteStore:
    """Most-recent-first collection of saved routes.

    Every successful ``save``/``remove`` writes the whole collection to
    storage before returning.  The in-memory collection changes as soon
    as the mutation starts and is rolled back if the write fails.
    Overlapping mutations from several callers are not supported.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = ROUTES_STORAGE_KEY,
        id_factory: Callable[[], str] = _default_id,
        on_change: Callable[[tuple[SavedRoute, ...]], None] | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._id_factory = id_factory
        self._on_change = on_change
        self._routes: list[SavedRoute] = []
        self._issued_ids: set[str] = set()
        self._load_warning: str | None = None

    @property
    def routes(self) -> tuple[SavedRoute, ...]:
        return tuple(self._routes)

    @property
    def load_warning(self) -> str | None:
        """Why the last ``load`` discarded persisted data, if it did."""
        return self._load_warning

    def get(self, route_id: str) -> SavedRoute | None:
        for route in self._routes:
            if route.id == route_id:
                return route
        return None

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[SavedRoute]:
        return iter(tuple(self._routes))

    async def load(self) -> tuple[SavedRoute, ...]:
        """Replace the collection with the persisted one.

        Missing or unreadable data yields an empty collection; only a
        failing storage read raises.
        """
        try:
            raw = await self._storage.get_item(self._key)
        except Exception as exc:
            raise RideWisePersistenceError(f"Reading {self._key!r} failed: {exc!r}", key=self._key) from exc

        self._load_warning = None
        if raw is None:
            routes: list[SavedRoute] = []
        else:
            try:
                routes = parse_routes(raw)
            except (ValidationError, ValueError) as exc:
                self._load_warning = f"discarded unreadable saved routes: {exc}"
                _logger.warning("Ignoring corrupt persisted routes under %r: %s", self._key, exc)
                routes = []

        self._routes = routes
        self._issued_ids.update(route.id for route in routes)
        self._notify()
        return self.routes

    async def save(self, name: str, origin: str, destination: str) -> SavedRoute:
        """Create a route, prepend it and persist the collection."""
        values = {"name": name, "from": origin, "to": destination}
        blank = [field for field, value in values.items() if not value or not value.strip()]
        if blank:
            raise RouteValidationError(f"Route fields must not be blank: {', '.join(blank)}", fields=blank)

        route = SavedRoute(id=self._new_id(), name=name, from_=origin, to=destination)
        await self._commit([route, *self._routes])
        _logger.debug("Saved route %s", route.id)
        return route

    async def remove(self, route_id: str) -> bool:
        """Drop the route with ``route_id``; persists even when nothing matched."""
        remaining = [route for route in self._routes if route.id != route_id]
        removed = len(remaining) != len(self._routes)
        await self._commit(remaining)
        return removed

    def _new_id(self) -> str:
        route_id = self._id_factory()
        while route_id in self._issued_ids or self.get(route_id) is not None:
            route_id = self._id_factory()
        self._issued_ids.add(route_id)
        return route_id

    async def _commit(self, routes: list[SavedRoute]) -> None:
        previous = self._routes
        self._routes = routes
        try:
            await self._storage.set_item(self._key, dump_routes(routes))
        except Exception as exc:
            self._routes = previous
            raise RideWisePersistenceError(f"Writing {self._key!r} failed: {exc!r}", key=self._key) from exc
        self._notify()

    def _notify(self) -> None:
        # The mutation is already committed when listeners run.
        if self._on_change is None:
            return
        try:
            self._on_change(self.routes)
        except Exception:
            _logger.exception("Saved-route change listener failed")
