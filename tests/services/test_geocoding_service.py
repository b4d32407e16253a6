# tests/services/test_geocoding_service.py
from unittest.mock import MagicMock

import pytest
import requests

from app.core.errors import UnavailableError
from app.services.geocoding_service import GeocodingService


def _session_returning(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    session = MagicMock()
    session.get.return_value = response
    return session


def test_geocode_success_is_memoised():
    session = _session_returning({
        "status": "OK",
        "results": [{
            "formatted_address": "Alexanderplatz, Berlin",
            "geometry": {"location": {"lat": 52.52, "lng": 13.41}},
        }],
    })
    geocoder = GeocodingService(api_key="test-key", url="https://geo.test", timeout=3, session=session)

    first = geocoder.geocode("Alexanderplatz")
    second = geocoder.geocode(" alexanderplatz ")

    assert first.latitude == 52.52
    assert first.longitude == 13.41
    assert second is first
    session.get.assert_called_once_with(
        "https://geo.test", params={"address": "Alexanderplatz", "key": "test-key"}, timeout=3
    )


def test_geocode_without_key_is_disabled():
    session = MagicMock()
    geocoder = GeocodingService(api_key="", session=session)

    assert geocoder.geocode("Anywhere") is None
    session.get.assert_not_called()


def test_geocode_no_results():
    geocoder = GeocodingService(
        api_key="test-key", session=_session_returning({"status": "ZERO_RESULTS", "results": []})
    )

    assert geocoder.geocode("Nowhere") is None


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("refused")])
def test_geocode_timeout_is_unavailable(error):
    session = MagicMock()
    session.get.side_effect = error
    geocoder = GeocodingService(api_key="test-key", session=session)

    with pytest.raises(UnavailableError):
        geocoder.geocode("Somewhere")


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "OK", "results": [{}]},
        {"status": "OK", "results": [{"geometry": {}}]},
        {"status": "OK", "results": [{"geometry": {"location": {"lat": "north", "lng": 1}}}]},
        {"status": "OK", "results": [None]},
        ["not", "an", "object"],
    ],
)
def test_geocode_malformed_response_is_unavailable(payload):
    geocoder = GeocodingService(api_key="test-key", session=_session_returning(payload))

    with pytest.raises(UnavailableError):
        geocoder.geocode("Somewhere")


def test_geocode_memo_is_bounded():
    session = _session_returning({
        "status": "OK",
        "results": [{"geometry": {"location": {"lat": 1.0, "lng": 2.0}}}],
    })
    geocoder = GeocodingService(api_key="test-key", session=session, memo_size=2)

    geocoder.geocode("first")
    geocoder.geocode("second")
    geocoder.geocode("first")
    geocoder.geocode("third")

    assert list(geocoder._memo) == ["first", "third"]
    assert session.get.call_count == 3

    geocoder.geocode("second")
    assert session.get.call_count == 4
