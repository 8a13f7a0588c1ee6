from typing import Optional
import math

def build_leg_query(
    origin: str,
    destination: str,
    date: str,
    adults: int,
    currency: str,
    max_results: int,
    max_price: Optional[float] = None,
    travel_class: Optional[str] = None,
    return_date: Optional[str] = None,
) -> dict:
    """
    Build the Amadeus Flight Offers Search parameters for one leg.

    Optional parameters are left out entirely when not given; the provider
    rejects empty values. A return date turns the query into a round trip
    answered by the same call.
    """
    params = {
        "originLocationCode": origin,
        "destinationLocationCode": destination,
        "departureDate": date,
        "adults": adults,
        "currencyCode": currency,
        "max": max_results,
    }

    if return_date:
        params["returnDate"] = return_date

    if max_price is not None:
        # Provider only takes whole numbers; round up so it never drops an offer we would keep
        params["maxPrice"] = math.ceil(max_price)

    if travel_class:
        params["travelClass"] = travel_class.upper()

    return params
