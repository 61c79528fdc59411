import pytest

from iptv_catalog.schemas import is_valid_stream_url
from iptv_catalog.services.catalog_types import RawChannelRecord
from iptv_catalog.services.validation_service import validate_record


def make_record(**overrides) -> RawChannelRecord:
    values = {
        "name": "Channel One",
        "stream_url": "https://streams.example/one.m3u8",
        "category": "General",
        "country": "Germany",
        "country_code": "de",
        "logo": "https://logo.example/one.png",
    }
    values.update(overrides)
    return RawChannelRecord(**values)


def test_valid_record_produces_payload():
    result = validate_record(make_record())

    assert result.ok
    assert result.error is None
    assert result.payload.name == "Channel One"
    assert result.payload.country_code == "de"
    assert result.payload.language == "en"
    assert result.payload.is_online is True


@pytest.mark.parametrize("field", ["name", "category", "country"])
def test_blank_required_field_is_rejected(field):
    result = validate_record(make_record(**{field: "   "}))

    assert not result.ok
    assert result.payload is None
    assert field in result.error


@pytest.mark.parametrize(
    "stream_url",
    [
        "",
        "http://",
        "ftp://streams.example/one.m3u8",
        "streams.example/one.m3u8",
        "http://[::1/bad",
    ],
)
def test_invalid_stream_url_is_rejected(stream_url):
    result = validate_record(make_record(stream_url=stream_url))

    assert not result.ok
    assert "stream_url" in result.error


@pytest.mark.parametrize("country_code", ["DE", "deu", "", "x"])
def test_malformed_country_code_is_rejected(country_code):
    result = validate_record(make_record(country_code=country_code))

    assert not result.ok
    assert "country_code" in result.error


def test_rejection_keeps_the_record_for_diagnostics():
    record = make_record(stream_url="http://")

    result = validate_record(record)

    assert result.record is record


def test_unknown_country_code_is_accepted():
    assert validate_record(make_record(country="Unknown", country_code="xx")).ok


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://a.example/x", True),
        ("HTTPS://a.example:8080/live?token=1", True),
        ("https://", False),
        ("rtmp://a.example/x", False),
    ],
)
def test_is_valid_stream_url(url, expected):
    assert is_valid_stream_url(url) is expected
