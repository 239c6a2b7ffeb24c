"""Base model for ridewise data records.

Every record inherits from :class:`RideWiseBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase wire keys (``etaMinutes``,
  ``isCheapest``) map automatically to snake_case fields.
* Frozen instances: quotes and routes are values, never edited in place.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RideWiseBaseModel(BaseModel):
    """Base for ridewise records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
