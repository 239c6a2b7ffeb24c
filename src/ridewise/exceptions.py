"""Custom exception hierarchy for ridewise."""

from __future__ import annotations

from collections.abc import Iterable


class RideWiseError(Exception):
    """Base exception for all ridewise errors."""


class RideWiseConfigError(RideWiseError):
    """Invalid or missing configuration."""


class RouteValidationError(RideWiseError):
    """A saved route was submitted with blank fields.

    Raised before any persistence attempt, so no partial state exists.
    ``fields`` lists the offending field names in declaration order.
    """

    def __init__(self, message: str, *, fields: Iterable[str] = ()) -> None:
        self.fields: tuple[str, ...] = tuple(fields)
        super().__init__(message)


class RideWiseCollaboratorError(RideWiseError):
    """An injected collaborator (quote source, storage, launcher) failed."""


class RideWiseQuoteSourceError(RideWiseCollaboratorError):
    """Quote source failure (network, non-200, invalid payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RideWisePersistenceError(RideWiseCollaboratorError):
    """Key-value storage read or write failed."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class RideWiseLaunchError(RideWiseCollaboratorError):
    """The URI launcher failed to check or open a URI.

    The launch is not retried; the caller decides what to show.
    """

    def __init__(self, message: str, *, uri: str = "") -> None:
        self.uri = uri
        super().__init__(message)
