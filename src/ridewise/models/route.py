"""Saved route model."""

from __future__ import annotations

from pydantic import Field

from ridewise.models._base import RideWiseBaseModel


class SavedRoute(RideWiseBaseModel):
    """A user-named pickup/drop pair.

    Serialized with the keys ``id``, ``name``, ``from`` and ``to``.
    """

    id: str
    name: str
    from_: str = Field(alias="from")
    to: str
