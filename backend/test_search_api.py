from app.errors import UpstreamCallError


def test_oneway_scenario(client_with, fake_fetcher, offer_factory):
    fetcher = fake_fetcher([offer_factory(total="120.00")])
    client = client_with(fetcher)

    response = client.post("/search_flights", json={
        "tripType": "oneway", "origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01",
    })

    assert response.status_code == 200
    assert fetcher.calls == [{
        "originLocationCode": "KWI",
        "destinationLocationCode": "DXB",
        "departureDate": "2025-06-01",
        "adults": 1,
        "currencyCode": "KWD",
        "max": 5,
    }]
    body = response.json()
    assert body["options"][0]["price"] == 120.0
    assert body["options"][0]["segments"][0]["from"] == "KWI"
    assert "returnDate" not in body


def test_trip_type_defaults_to_oneway(client_with, fake_fetcher):
    client = client_with(fake_fetcher([]))

    response = client.post("/search_flights", json={"origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01"})

    assert response.status_code == 200
    assert response.json()["tripType"] == "oneway"
    assert response.json()["options"] == []


def test_missing_destination_is_400(client_with, fake_fetcher):
    fetcher = fake_fetcher()
    client = client_with(fetcher)

    response = client.post("/search_flights", json={"tripType": "oneway", "origin": "KWI", "departureDate": "2025-06-01"})

    assert response.status_code == 400
    assert "destination" in response.json()["error"]
    assert fetcher.calls == []


def test_roundtrip_without_return_date_is_400(client_with, fake_fetcher):
    client = client_with(fake_fetcher())

    response = client.post("/search_flights", json={
        "tripType": "roundtrip", "origin": "KWI", "destination": "LHR", "departureDate": "2025-07-01",
    })

    assert response.status_code == 400
    assert "returnDate" in response.json()["error"]


def test_unsupported_trip_type_is_400(client_with, fake_fetcher):
    client = client_with(fake_fetcher())

    response = client.post("/search_flights", json={"tripType": "circle", "origin": "A", "destination": "B", "departureDate": "2025-01-01"})

    assert response.status_code == 400
    assert "circle" in response.json()["error"]


def test_malformed_body_is_400(client_with, fake_fetcher):
    client = client_with(fake_fetcher())

    response = client.post("/search_flights", json={"origin": "A", "destination": "B", "departureDate": "2025-01-01", "adults": "many"})

    assert response.status_code == 400
    assert "adults" in response.json()["error"]


def test_multi_scenario_budget(client_with, fake_fetcher, offer_factory):
    fetcher = fake_fetcher([offer_factory(offer_id="1", total="250"), offer_factory(offer_id="2", total="400")])
    client = client_with(fetcher)

    response = client.post("/search_flights", json={
        "tripType": "multi",
        "maxPrice": 300,
        "segments": [{"origin": "A", "destination": "B", "date": "2025-01-01"}],
    })

    assert response.status_code == 200
    legs = response.json()["legs"]
    assert len(legs) == 1
    assert legs[0]["index"] == 1
    assert [o["price"] for o in legs[0]["options"]] == [250.0]


def test_multi_invalid_leg_is_400(client_with, fake_fetcher):
    fetcher = fake_fetcher()
    client = client_with(fetcher)

    response = client.post("/search_flights", json={
        "tripType": "multi",
        "segments": [{"origin": "A", "destination": "B", "date": "2025-01-01"}, {"origin": "B", "destination": "C"}],
    })

    assert response.status_code == 400
    assert "segment 2" in response.json()["error"]
    assert fetcher.calls == []


def test_upstream_failure_is_500_with_details(client_with, fake_fetcher):
    payload = {"errors": [{"status": 400, "code": 477, "title": "INVALID FORMAT"}]}
    client = client_with(fake_fetcher(UpstreamCallError("Amadeus flight search failed (ClientError)", details=payload)))

    response = client.post("/search_flights", json={"origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to search flights", "details": payload}


def test_malformed_offer_is_500(client_with, fake_fetcher, offer_factory):
    client = client_with(fake_fetcher([offer_factory(total="free")]))

    response = client.post("/search_flights", json={"origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to search flights"
    assert "non-numeric price" in response.json()["details"]


def test_health(client_with, fake_fetcher):
    response = client_with(fake_fetcher()).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_wrongly_typed_fare_detail_still_returns_json(client_with, fake_fetcher, offer_factory):
    client = client_with(fake_fetcher([offer_factory(fare_details=[{"segmentId": "1", "cabin": 7}])]))

    response = client.post("/search_flights", json={"origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01"})

    assert response.status_code == 200
    assert response.json()["options"][0]["cabin"] is None


def test_wrongly_typed_offer_field_is_json_500(client_with, fake_fetcher, offer_factory):
    client = client_with(fake_fetcher([offer_factory(duration=125)]))

    response = client.post("/search_flights", json={"origin": "KWI", "destination": "DXB", "departureDate": "2025-06-01"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["error"] == "Failed to search flights"
    assert "invalid field" in response.json()["details"]
