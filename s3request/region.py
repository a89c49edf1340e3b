""":mod:`s3request.region` --- AWS regions and their S3 endpoints
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

The closed set of regions requests can be signed for.  Each region has
its wire name (used in the credential scope) and the host name of its
S3 endpoint.  Supporting another region means adding it to
:class:`Region` and to both tables below.

"""
import enum

__all__ = ('ParseError', 'Region',
           'endpoint_host', 'from_wire_string', 'to_wire_string')


class Region(enum.Enum):
    """Supported AWS regions."""

    #: Asia Pacific (Tokyo)
    AP_NORTHEAST_1 = 'ap-northeast-1'

    #: Asia Pacific (Singapore)
    AP_SOUTHEAST_1 = 'ap-southeast-1'

    #: Asia Pacific (Sydney)
    AP_SOUTHEAST_2 = 'ap-southeast-2'

    #: EU (Frankfurt)
    EU_CENTRAL_1 = 'eu-central-1'

    #: EU (Ireland)
    EU_WEST_1 = 'eu-west-1'

    #: South America (Sao Paulo)
    SA_EAST_1 = 'sa-east-1'

    #: US East (N. Virginia)
    US_EAST_1 = 'us-east-1'

    #: US West (N. California)
    US_WEST_1 = 'us-west-1'

    #: US West (Oregon)
    US_WEST_2 = 'us-west-2'

    def __str__(self):
        return to_wire_string(self)


WIRE_NAMES = {
    Region.AP_NORTHEAST_1: 'ap-northeast-1',
    Region.AP_SOUTHEAST_1: 'ap-southeast-1',
    Region.AP_SOUTHEAST_2: 'ap-southeast-2',
    Region.EU_CENTRAL_1: 'eu-central-1',
    Region.EU_WEST_1: 'eu-west-1',
    Region.SA_EAST_1: 'sa-east-1',
    Region.US_EAST_1: 'us-east-1',
    Region.US_WEST_1: 'us-west-1',
    Region.US_WEST_2: 'us-west-2',
}

ENDPOINT_HOSTS = {
    Region.AP_NORTHEAST_1: 's3-ap-northeast-1.amazonaws.com',
    Region.AP_SOUTHEAST_1: 's3-ap-southeast-1.amazonaws.com',
    Region.AP_SOUTHEAST_2: 's3-ap-southeast-2.amazonaws.com',
    Region.EU_CENTRAL_1: 's3-eu-central-1.amazonaws.com',
    Region.EU_WEST_1: 's3-eu-west-1.amazonaws.com',
    Region.SA_EAST_1: 's3-sa-east-1.amazonaws.com',
    Region.US_EAST_1: 's3.amazonaws.com',
    Region.US_WEST_1: 's3-us-west-1.amazonaws.com',
    Region.US_WEST_2: 's3-us-west-2.amazonaws.com',
}

_REGIONS_BY_WIRE_NAME = dict((name, region)
                             for region, name in WIRE_NAMES.items())


def to_wire_string(region):
    """Gets the canonical name of the ``region`` e.g. ``'eu-west-1'``.

    :param region: the region
    :type region: :class:`Region`
    :returns: the lowercase hyphenated region name
    :rtype: :class:`str`

    """
    return WIRE_NAMES[region]


def from_wire_string(string):
    """Parses a canonical region name.  There is no fallback region:
    unknown names are always an error.

    :param string: the region name e.g. ``'us-west-2'``
    :type string: :class:`str`
    :returns: the matching region
    :rtype: :class:`Region`
    :raise ParseError: when the region is not supported

    """
    try:
        return _REGIONS_BY_WIRE_NAME[string]
    except (KeyError, TypeError):
        raise ParseError(string)


def endpoint_host(region):
    """Gets the host name of the S3 endpoint of the ``region``.

    :param region: the region
    :type region: :class:`Region`
    :rtype: :class:`str`

    """
    return ENDPOINT_HOSTS[region]


class ParseError(ValueError):
    """Raised when a region name is not one of the supported
    :class:`Region` values.

    """

    def __init__(self, string):
        super(ParseError, self).__init__(string)
        self.string = string

    def __str__(self):
        return 'unsupported region: {0!r}'.format(self.string)
