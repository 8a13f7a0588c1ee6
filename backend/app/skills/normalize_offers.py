from app.errors import MalformedUpstreamResponse
from app.models import Option, Segment
from app.skills.fare_attribution import attribution_for, resolve_fare_attribution
from typing import List
import logging
import math

logger = logging.getLogger(__name__)

def parse_price(raw: dict) -> float:
    """Parse the provider's string total ("542.30") into a float."""
    offer_id = raw.get('id')
    price = raw.get('price')
    total = price.get('total') if isinstance(price, dict) else None
    try:
        value = float(total)
    except (TypeError, ValueError):
        raise MalformedUpstreamResponse(f"Offer {offer_id} has a non-numeric price total: {total!r}", offer_id=offer_id)
    if math.isnan(value):
        raise MalformedUpstreamResponse(f"Offer {offer_id} has a non-numeric price total: {total!r}", offer_id=offer_id)
    return value

def normalize_segment(seg: dict, fare) -> Segment:
    return Segment(
        from_=seg['departure']['iataCode'],
        to=seg['arrival']['iataCode'],
        departureTime=seg['departure']['at'],
        arrivalTime=seg['arrival']['at'],
        carrier=seg['carrierCode'],
        flightNumber=seg['number'],
        cabin=fare.cabin,
        booking_class=fare.booking_class,
        brandedFare=fare.brandedFare,
        fareBasis=fare.fareBasis,
        checkedBags=fare.checkedBags,
    )

def normalize_offer(raw: dict) -> Option:
    """
    Flatten one Amadeus flight offer into an Option.

    Only the first itinerary is described (for a round trip that is the
    outbound). The offer-level fare fields are those of the first segment.
    """
    if not isinstance(raw, dict):
        raise MalformedUpstreamResponse(f"Offer is not an object: {raw!r}")
    offer_id = raw.get('id')
    itineraries = raw.get('itineraries') or []
    if not isinstance(itineraries, list) or not itineraries:
        raise MalformedUpstreamResponse(f"Offer {offer_id} has no itineraries", offer_id=offer_id)
    itinerary = itineraries[0]
    if not isinstance(itinerary, dict):
        raise MalformedUpstreamResponse(f"Offer {offer_id} has an invalid itinerary: {itinerary!r}", offer_id=offer_id)
    raw_segments = itinerary.get('segments') or []
    if not raw_segments:
        raise MalformedUpstreamResponse(f"Offer {offer_id} has an itinerary without segments", offer_id=offer_id)

    price = parse_price(raw)
    currency = raw['price'].get('currency')
    if offer_id is None or currency is None:
        raise MalformedUpstreamResponse(f"Offer {offer_id} is missing its id or currency", offer_id=offer_id)

    try:
        attribution = resolve_fare_attribution(raw)
        segments = [
            normalize_segment(seg, attribution_for(attribution, seg.get('id')))
            for seg in raw_segments
        ]
        first_fare = attribution_for(attribution, raw_segments[0].get('id'))

        return Option(
            id=str(offer_id),
            price=price,
            currency=currency,
            duration=itinerary.get('duration'),
            airline=segments[0].carrier,
            cabin=first_fare.cabin,
            brandedFare=first_fare.brandedFare,
            fareBasis=first_fare.fareBasis,
            checkedBags=first_fare.checkedBags,
            segments=segments,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        # ValueError covers pydantic rejecting a null or wrongly typed field
        raise MalformedUpstreamResponse(f"Offer {offer_id} has an invalid field: {e}", offer_id=offer_id) from e

def normalize_offers(raw_offers: List[dict]) -> List[Option]:
    """Normalize every offer; the first malformed one fails the whole batch."""
    normalized = [normalize_offer(raw) for raw in raw_offers]
    logger.debug(f"Normalized {len(normalized)} offers")
    return normalized
