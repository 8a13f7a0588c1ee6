from app.errors import FlightSearchError, SearchValidationError, UnsupportedTripType
from app.models import FlightSearchRequest, Leg, Option
from app.skills.leg_query import build_leg_query
from app.skills.normalize_offers import normalize_offers
from pydantic import BaseModel
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)

# Takes Flight Offers Search params, returns the raw offers
OfferFetcher = Callable[[dict], List[dict]]

SINGLE_LEG_TRIPS = ("oneway", "roundtrip")

class PlannedLeg(BaseModel):
    index: int
    origin: str
    destination: str
    date: str
    returnDate: Optional[str] = None  # roundtrip only

class SearchPlan(BaseModel):
    """A validated request: trip type plus the legs to query, in order."""
    tripType: str
    legs: List[PlannedLeg]
    adults: int
    currency: str
    max_results: int
    maxPrice: Optional[float] = None
    travelClass: Optional[str] = None

def _plan_single_leg(request: FlightSearchRequest) -> List[PlannedLeg]:
    if not (request.origin and request.destination and request.departureDate):
        raise SearchValidationError("origin, destination, and departureDate are required")

    return_date = None
    if request.tripType == "roundtrip":
        if not request.returnDate:
            raise SearchValidationError("returnDate is required for roundtrip searches")
        return_date = request.returnDate

    return [PlannedLeg(
        index=1,
        origin=request.origin,
        destination=request.destination,
        date=request.departureDate,
        returnDate=return_date,
    )]

def _plan_multi_city(request: FlightSearchRequest) -> List[PlannedLeg]:
    if not request.segments:
        raise SearchValidationError("segments must be a non-empty list for multi-city searches")

    legs = []
    for index, spec in enumerate(request.segments, start=1):
        if not (spec.origin and spec.destination and spec.date):
            raise SearchValidationError(
                f"segment {index}: origin, destination, and date are required",
                leg_index=index,
            )
        legs.append(PlannedLeg(index=index, origin=spec.origin, destination=spec.destination, date=spec.date))
    return legs

def plan_search(request: FlightSearchRequest) -> SearchPlan:
    """
    Validate a request and resolve it into the legs to query.

    Nothing is sent upstream until the whole request is valid; in a
    multi-city request the first bad leg rejects everything.
    """
    if request.tripType in SINGLE_LEG_TRIPS:
        legs = _plan_single_leg(request)
    elif request.tripType == "multi":
        legs = _plan_multi_city(request)
    else:
        raise UnsupportedTripType(request.tripType)

    if request.adults < 1:
        raise SearchValidationError("adults must be at least 1")
    if request.max_results < 1:
        raise SearchValidationError("max must be at least 1")
    if request.maxPrice is not None and request.maxPrice < 0:
        raise SearchValidationError("maxPrice must not be negative")

    return SearchPlan(
        tripType=request.tripType,
        legs=legs,
        adults=request.adults,
        currency=request.currency,
        max_results=request.max_results,
        maxPrice=request.maxPrice,
        travelClass=request.travelClass,
    )

def apply_budget(options: List[Option], max_price: Optional[float]) -> List[Option]:
    """Keep options priced at or under the ceiling, in their original order."""
    if max_price is None:
        return options
    return [option for option in options if option.price <= max_price]

def search_leg(leg: PlannedLeg, plan: SearchPlan, fetch: OfferFetcher) -> List[Option]:
    params = build_leg_query(
        origin=leg.origin,
        destination=leg.destination,
        date=leg.date,
        adults=plan.adults,
        currency=plan.currency,
        max_results=plan.max_results,
        max_price=plan.maxPrice,
        travel_class=plan.travelClass,
        return_date=leg.returnDate,
    )
    options = normalize_offers(fetch(params))

    # The provider treats maxPrice as a hint, so filter again here
    within_budget = apply_budget(options, plan.maxPrice)
    if len(within_budget) < len(options):
        logger.info(f"Leg {leg.index}: dropped {len(options) - len(within_budget)} offers above {plan.maxPrice}")
    return within_budget

def _shared_fields(plan: SearchPlan) -> dict:
    fields = {
        "tripType": plan.tripType,
        "adults": plan.adults,
        "currency": plan.currency,
        "max": plan.max_results,
    }
    if plan.maxPrice is not None:
        fields["maxPrice"] = plan.maxPrice
    if plan.travelClass:
        fields["travelClass"] = plan.travelClass
    return fields

def execute_search(plan: SearchPlan, fetch: OfferFetcher) -> dict:
    """
    Query every leg in order and assemble the response body.

    Legs run one after another. A failing leg aborts the request; legs
    already fetched are discarded rather than returned as a partial result.
    """
    logger.info(f"Executing {plan.tripType} search with {len(plan.legs)} leg(s)")
    response = _shared_fields(plan)

    if plan.tripType == "multi":
        legs = []
        for leg in plan.legs:
            try:
                options = search_leg(leg, plan, fetch)
            except FlightSearchError:
                logger.error(f"Multi-city search aborted at leg {leg.index} ({leg.origin}->{leg.destination})")
                raise
            legs.append(Leg(index=leg.index, origin=leg.origin, destination=leg.destination, date=leg.date, options=options))
        response["legs"] = [leg.model_dump(by_alias=True) for leg in legs]
        return response

    leg = plan.legs[0]
    response["origin"] = leg.origin
    response["destination"] = leg.destination
    response["departureDate"] = leg.date
    if leg.returnDate:
        response["returnDate"] = leg.returnDate
    response["options"] = [option.model_dump(by_alias=True) for option in search_leg(leg, plan, fetch)]
    return response

def search_flights(request: FlightSearchRequest, fetch: OfferFetcher) -> dict:
    return execute_search(plan_search(request), fetch)
