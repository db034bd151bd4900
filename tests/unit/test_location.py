import pytest

from ogp2gbl.common.errors import (
    InvalidBoundsError,
    InvalidLocationError,
    MalformedLocationError,
    NoLocationError,
)
from ogp2gbl.pipeline.location import parse_location, validate_bounds, validate_location


def test_parse_location_collapses_service_lists():
    location = parse_location(
        '{"wms": ["http://a.test/wms", "http://b.test/wms"], "wfs": [], "purl": ["http://purl.test/x"]}'
    )
    assert location == {"wms": "http://a.test/wms", "purl": ["http://purl.test/x"]}


def test_parse_location_missing_is_no_location():
    with pytest.raises(NoLocationError) as excinfo:
        parse_location(None, "L1")
    assert str(excinfo.value) == "ERROR: L1 no location"

    with pytest.raises(NoLocationError):
        parse_location("", "L1")


@pytest.mark.parametrize("raw", ["{not json", '["http://a.test/wms"]', "42", 17])
def test_parse_location_malformed(raw):
    with pytest.raises(MalformedLocationError) as excinfo:
        parse_location(raw, "L2")
    assert excinfo.value.record_id == "L2"
    assert "malformed location" in str(excinfo.value)


def test_validate_location_accepts_wms_and_wfs():
    location = validate_location('{"wms": "http://a.test/wms", "wfs": ["https://a.test/wfs"]}')
    assert location["wms"] == ["http://a.test/wms"]
    assert location["wfs"] == ["https://a.test/wfs"]


def test_validate_location_requires_wms_plus_wfs_or_wcs():
    with pytest.raises(InvalidLocationError):
        validate_location('{"wms": "http://a.test/wms"}')
    with pytest.raises(InvalidLocationError):
        validate_location('{"wfs": "http://a.test/wfs"}')


def test_validate_location_rejects_bad_urls():
    with pytest.raises(InvalidLocationError) as excinfo:
        validate_location('{"wms": "a.test/wms", "wcs": "http://a.test/wcs"}', "L3")
    assert "wms" in str(excinfo.value)

    with pytest.raises(InvalidLocationError):
        validate_location('{"wms": {"url": "http://a.test"}, "wcs": "http://a.test/wcs"}')


def test_validate_bounds():
    validate_bounds({"south": -90.0, "west": -180.0, "north": 90.0, "east": 180.0})
    with pytest.raises(InvalidBoundsError):
        validate_bounds({"south": -91.0, "west": 0.0, "north": 0.0, "east": 0.0})
    with pytest.raises(InvalidBoundsError):
        validate_bounds({"south": 0.0, "west": 0.0, "north": 0.0, "east": 181.0})
