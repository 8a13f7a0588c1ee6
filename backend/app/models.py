from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from app.config import settings

class FareAttribution(BaseModel):
    """Fare metadata for one segment. Every field may be missing upstream."""
    cabin: Optional[str] = None
    booking_class: Optional[str] = Field(default=None, alias="class")
    brandedFare: Optional[str] = None
    fareBasis: Optional[str] = None
    checkedBags: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

class Segment(BaseModel):
    from_: str = Field(alias="from")
    to: str
    departureTime: str
    arrivalTime: str
    carrier: str
    flightNumber: str

    # Resolved independently for this segment
    cabin: Optional[str] = None
    booking_class: Optional[str] = Field(default=None, alias="class")
    brandedFare: Optional[str] = None
    fareBasis: Optional[str] = None
    checkedBags: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)

class Option(BaseModel):
    id: str
    price: float
    currency: str
    duration: Optional[str] = None
    airline: str  # carrier of the first segment

    # Copied from the first segment's fare attribution
    cabin: Optional[str] = None
    brandedFare: Optional[str] = None
    fareBasis: Optional[str] = None
    checkedBags: Optional[int] = None

    segments: List[Segment]

class Leg(BaseModel):
    index: int  # 1-based, request order
    origin: str
    destination: str
    date: str
    options: List[Option]

class LegSpec(BaseModel):
    """One origin/destination/date entry of a multi-city request."""
    origin: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[str] = None

class FlightSearchRequest(BaseModel):
    """Inbound body of POST /search_flights."""
    tripType: str = "oneway"  # oneway | roundtrip | multi

    # Single-leg fields (oneway / roundtrip)
    origin: Optional[str] = None
    destination: Optional[str] = None
    departureDate: Optional[str] = None
    returnDate: Optional[str] = None

    # Multi-city legs, in travel order
    segments: Optional[List[LegSpec]] = None

    adults: int = 1
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    max_results: int = Field(default_factory=lambda: settings.DEFAULT_MAX_RESULTS, alias="max")
    maxPrice: Optional[float] = None
    travelClass: Optional[str] = None  # ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST

    model_config = ConfigDict(populate_by_name=True)
