from pytest import mark, raises

from s3request.region import (ENDPOINT_HOSTS, WIRE_NAMES, ParseError, Region,
                              endpoint_host, from_wire_string, to_wire_string)


@mark.parametrize('region', list(Region))
def test_wire_string_round_trip(region):
    assert from_wire_string(to_wire_string(region)) is region


def test_tables_cover_every_region():
    assert set(WIRE_NAMES) == set(Region)
    assert set(ENDPOINT_HOSTS) == set(Region)
    assert len(set(WIRE_NAMES.values())) == len(Region)
    assert len(set(ENDPOINT_HOSTS.values())) == len(Region)


def test_to_wire_string():
    assert to_wire_string(Region.EU_CENTRAL_1) == 'eu-central-1'
    assert str(Region.AP_SOUTHEAST_2) == 'ap-southeast-2'


def test_endpoint_host():
    assert endpoint_host(Region.US_EAST_1) == 's3.amazonaws.com'
    assert endpoint_host(Region.US_WEST_2) == 's3-us-west-2.amazonaws.com'
    assert endpoint_host(Region.SA_EAST_1) == 's3-sa-east-1.amazonaws.com'


@mark.parametrize('string', ['', 'US-EAST-1', 'us-east-2', 'us_east_1',
                             ' us-east-1', 'cn-north-1', None])
def test_unsupported_region(string):
    with raises(ParseError) as exc_info:
        from_wire_string(string)
    assert exc_info.value.string == string
    assert 'unsupported region' in str(exc_info.value)


def test_parse_error_is_value_error():
    with raises(ValueError):
        from_wire_string('mars-north-1')
