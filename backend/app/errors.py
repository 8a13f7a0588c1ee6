from typing import Any, Optional


class FlightSearchError(Exception):
    """Base class for every failure surfaced by a flight search."""


class SearchValidationError(FlightSearchError):
    """The caller sent a request that cannot be searched (HTTP 400)."""

    def __init__(self, message: str, leg_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.leg_index = leg_index


class UnsupportedTripType(SearchValidationError):
    def __init__(self, trip_type: Any):
        super().__init__(f"Unsupported tripType '{trip_type}'. Use oneway, roundtrip or multi")
        self.trip_type = trip_type


class UpstreamCallError(FlightSearchError):
    """Authentication or flight-offer call to the provider failed (HTTP 500)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message


class MalformedUpstreamResponse(FlightSearchError):
    """The provider returned an offer we cannot normalize (HTTP 500)."""

    def __init__(self, message: str, offer_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.offer_id = offer_id
