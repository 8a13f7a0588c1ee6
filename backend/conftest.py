import os

# Settings requires credentials at import time
os.environ.setdefault("AMADEUS_CLIENT_ID", "test-client-id")
os.environ.setdefault("AMADEUS_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("DEFAULT_CURRENCY", "KWD")
os.environ.setdefault("DEFAULT_MAX_RESULTS", "5")

import pytest
from fastapi.testclient import TestClient


def build_segment(segment_id, origin, destination, carrier="KU", number="677",
                  departure_at="2025-06-01T08:00:00", arrival_at="2025-06-01T10:05:00"):
    return {
        "id": segment_id,
        "departure": {"iataCode": origin, "at": departure_at},
        "arrival": {"iataCode": destination, "at": arrival_at},
        "carrierCode": carrier,
        "number": number,
        "duration": "PT2H05M",
    }


def build_offer(offer_id="1", total="250.00", currency="KWD", segments=None,
                fare_details=None, duration="PT2H05M"):
    """Amadeus flight-offer dict; fare_details=None leaves out travelerPricings."""
    if segments is None:
        segments = [build_segment("1", "KWI", "DXB")]
    offer = {
        "type": "flight-offer",
        "id": offer_id,
        "price": {"currency": currency, "total": total, "grandTotal": total},
        "itineraries": [{"duration": duration, "segments": segments}],
    }
    if fare_details is not None:
        offer["travelerPricings"] = [
            {"travelerId": "1", "travelerType": "ADULT", "fareDetailsBySegment": fare_details}
        ]
    return offer


class FakeFetcher:
    """Stands in for the Amadeus fetcher; one queued result per call."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, params):
        self.calls.append(params)
        result = self.results.pop(0) if self.results else []
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def offer_factory():
    return build_offer


@pytest.fixture
def segment_factory():
    return build_segment


@pytest.fixture
def client_with():
    from app.main import app
    from app.skills.search_offers import get_offer_fetcher

    def _client(fetcher):
        app.dependency_overrides[get_offer_fetcher] = lambda: fetcher
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher
