from amadeus import Client, ResponseError
from app.config import settings
from app.errors import UpstreamCallError
from typing import Any
import logging

logger = logging.getLogger(__name__)

def connect() -> Client:
    """
    Build an Amadeus client for one inbound request.

    The SDK exchanges the client credentials for a bearer token on the first
    call, so nothing is shared between requests.
    """
    try:
        return Client(
            client_id=settings.AMADEUS_CLIENT_ID,
            client_secret=settings.AMADEUS_CLIENT_SECRET,
            hostname=settings.AMADEUS_HOSTNAME,
            logger=logging.getLogger("amadeus"),
            log_level="debug" if settings.LOG_LEVEL.upper() == "DEBUG" else "warn",
        )
    except ValueError as e:
        logger.error(f"Failed to initialize Amadeus client: {e}")
        raise UpstreamCallError("Failed to initialize Amadeus client", details=str(e)) from e

def error_details(error: ResponseError) -> Any:
    """Provider error payload when there is one, otherwise the error text."""
    response = getattr(error, 'response', None)
    if response is not None:
        if getattr(response, 'result', None):
            return response.result
        if getattr(response, 'body', None):
            return response.body
    return str(error)

def search_offers(client: Client, params: dict) -> list[dict]:
    """Run one Flight Offers Search call and return the raw offers."""
    logger.info(f"Searching offers: {params['originLocationCode']}->{params['destinationLocationCode']} on {params['departureDate']}")
    try:
        response = client.shopping.flight_offers_search.get(**params)
    except ResponseError as e:
        details = error_details(e)
        logger.error(f"Amadeus API Error ({e.code}): {details}")
        raise UpstreamCallError(f"Amadeus flight search failed ({e.code})", details=details) from e

    offers = response.data or []
    logger.info(f"Amadeus returned {len(offers)} offers")
    return offers

class AmadeusOfferFetcher:
    """Fetches raw offers for one request; the client is built on first use."""

    def __init__(self):
        self._client = None

    def __call__(self, params: dict) -> list[dict]:
        if self._client is None:
            self._client = connect()
        return search_offers(self._client, params)

def get_offer_fetcher() -> AmadeusOfferFetcher:
    # FastAPI dependency: a fresh fetcher per request
    return AmadeusOfferFetcher()
