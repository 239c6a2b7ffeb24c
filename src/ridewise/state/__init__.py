"""State/store layer.

The saved-route collection lives here; it is the single owner of that
state and the only code that writes it to storage.
"""

from ridewise.state.store import RouteStore, dump_routes, parse_routes

__all__ = ["RouteStore", "dump_routes", "parse_routes"]
