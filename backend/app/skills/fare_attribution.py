from app.models import FareAttribution
from typing import Dict, Optional

EMPTY_ATTRIBUTION = FareAttribution()

def _text(fare_detail: dict, key: str) -> Optional[str]:
    value = fare_detail.get(key)
    return value if isinstance(value, str) else None

def _checked_bags(fare_detail: dict) -> Optional[int]:
    # Weight-based allowances ({"weight": 23, "weightUnit": "KG"}) carry no piece count
    bags = fare_detail.get('includedCheckedBags')
    if not isinstance(bags, dict):
        return None
    quantity = bags.get('quantity')
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        return None
    return quantity

def resolve_fare_attribution(raw: dict) -> Dict[str, FareAttribution]:
    """
    Map segment id -> fare attribution for one Amadeus offer.

    Only the first traveler pricing is read; fares that differ between
    travelers are not modeled. Absent or wrongly typed fields are None, and
    an offer without traveler pricings (or fare details) yields an empty
    mapping. Never raises.
    """
    traveler_pricings = raw.get('travelerPricings') if isinstance(raw, dict) else None
    if not isinstance(traveler_pricings, list) or not traveler_pricings:
        return {}
    first = traveler_pricings[0]
    fare_details = first.get('fareDetailsBySegment') if isinstance(first, dict) else None
    if not isinstance(fare_details, list):
        return {}

    attribution = {}
    for fare_detail in fare_details:
        if not isinstance(fare_detail, dict):
            continue
        segment_id = fare_detail.get('segmentId')
        if segment_id is None:
            continue
        attribution[str(segment_id)] = FareAttribution(
            cabin=_text(fare_detail, 'cabin'),
            booking_class=_text(fare_detail, 'class'),
            brandedFare=_text(fare_detail, 'brandedFare'),
            fareBasis=_text(fare_detail, 'fareBasis'),
            checkedBags=_checked_bags(fare_detail),
        )
    return attribution

def attribution_for(attribution: Dict[str, FareAttribution], segment_id) -> FareAttribution:
    """Lookup that treats a missing segment exactly like an all-None entry."""
    if segment_id is None:
        return EMPTY_ATTRIBUTION
    return attribution.get(str(segment_id), EMPTY_ATTRIBUTION)
