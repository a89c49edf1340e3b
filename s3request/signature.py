""":mod:`s3request.signature` --- AWS Signature Version 4
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Computes the ``Authorization`` header of `Signature Version 4`__
(AWS4Auth) from a canonical request built by :mod:`s3request.canonical`.

The same instant has to be used for the ``x-amz-date`` header, the
string to sign and the credential scope, so every function here takes
the time explicitly instead of reading the clock.

__ https://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-authenticating-requests.html

"""
import collections
import datetime
import hashlib
import hmac
import logging

from .region import to_wire_string

__all__ = ('ALGORITHM', 'SECURITY_TOKEN_HEADER', 'SERVICE', 'TERMINATOR',
           'SigningScope', 'redact',
           'derive_signing_key', 'format_authorization', 'format_date',
           'format_timestamp', 'hmac_sha256', 'sign', 'string_to_sign')


#: (:class:`str`) The algorithm identifier.
ALGORITHM = 'AWS4-HMAC-SHA256'

#: (:class:`str`) The service name in the credential scope.
SERVICE = 's3'

#: (:class:`str`) The last component of the credential scope.
TERMINATOR = 'aws4_request'

#: (:class:`str`) The header carrying the session token of temporary
#: credentials.  Its value is never logged.
SECURITY_TOKEN_HEADER = 'x-amz-security-token'

logger = logging.getLogger(__name__)


def _to_utc(time):
    if time.tzinfo is None:
        return time
    return time.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def format_timestamp(time):
    """Formats the ``time`` in ISO 8601 basic format in UTC,
    e.g. ``'20130524T000000Z'``.  Naive datetimes are taken as UTC.

    :param time: the time to format
    :type time: :class:`datetime.datetime`
    :rtype: :class:`str`

    """
    return _to_utc(time).strftime('%Y%m%dT%H%M%SZ')


def format_date(time):
    """Formats the UTC date of the ``time`` e.g. ``'20130524'``."""
    return _to_utc(time).strftime('%Y%m%d')


class SigningScope(collections.namedtuple('SigningScope', 'date region')):
    """The credential scope which binds a signature to a day and
    a region of S3.  Its string form is
    ``<YYYYMMDD>/<region>/s3/aws4_request``.

    :param date: the date formatted by :func:`format_date()`
    :type date: :class:`str`
    :param region: the region
    :type region: :class:`~s3request.region.Region`

    """

    __slots__ = ()

    @classmethod
    def at(cls, time, region):
        return cls(format_date(time), region)

    def __str__(self):
        return '/'.join([self.date, to_wire_string(self.region),
                         SERVICE, TERMINATOR])


def hmac_sha256(key, message):
    if not isinstance(message, bytes):
        message = message.encode('utf-8')
    return hmac.new(key, message, hashlib.sha256).digest()


def derive_signing_key(secret_key, scope):
    """Derives the signing key from the ``secret_key``.  The key is only
    valid for the date and region of the ``scope``, so it is computed
    anew for every request.

    :param secret_key: the AWS secret access key
    :type secret_key: :class:`str`
    :param scope: the credential scope
    :type scope: :class:`SigningScope`
    :rtype: :class:`bytes`

    """
    date_key = hmac_sha256(('AWS4' + secret_key).encode('utf-8'), scope.date)
    date_region_key = hmac_sha256(date_key, to_wire_string(scope.region))
    date_region_service_key = hmac_sha256(date_region_key, SERVICE)
    return hmac_sha256(date_region_service_key, TERMINATOR)


def string_to_sign(canonical_request, time, scope):
    """Makes the string to sign::

        AWS4-HMAC-SHA256
        <timestamp>
        <scope>
        <hex SHA-256 of the canonical request>

    """
    digest = hashlib.sha256(canonical_request.encode('utf-8')).hexdigest()
    return '\n'.join([ALGORITHM, format_timestamp(time), str(scope), digest])


def redact(canonical_request):
    """Hides the value of the ``x-amz-security-token`` header in the
    ``canonical_request`` so that it can be logged.

    """
    lines = canonical_request.split('\n')
    for i, line in enumerate(lines):
        if line.startswith(SECURITY_TOKEN_HEADER + ':'):
            lines[i] = SECURITY_TOKEN_HEADER + ':<redacted>'
    return '\n'.join(lines)


def format_authorization(access_key, scope, signed_headers, signature):
    fmt = '{0} Credential={1}/{2},SignedHeaders={3},Signature={4}'
    return fmt.format(ALGORITHM, access_key, scope, signed_headers, signature)


def sign(canonical_request, signed_headers, credentials, region, time):
    """Signs the ``canonical_request`` and makes the value of
    the ``Authorization`` header.

    :param canonical_request: the canonical request string made by
                              :func:`s3request.canonical.build()`
    :type canonical_request: :class:`str`
    :param signed_headers: the ``;``-separated signed header names
    :type signed_headers: :class:`str`
    :param credentials: the credentials to sign with
    :type credentials: :class:`~s3request.credentials.Credentials`
    :param region: the region the request is sent to
    :type region: :class:`~s3request.region.Region`
    :param time: the time of the request.  it has to be the same time
                 as the ``x-amz-date`` header
    :type time: :class:`datetime.datetime`
    :returns: the ``Authorization`` header value
    :rtype: :class:`str`

    """
    scope = SigningScope.at(time, region)
    to_sign = string_to_sign(canonical_request, time, scope)
    logger.getChild('sign').debug('canonical_request = %r',
                                  redact(canonical_request))
    logger.getChild('sign').debug('string_to_sign = %r', to_sign)
    signing_key = derive_signing_key(credentials.secret_key, scope)
    signature = hmac.new(signing_key, to_sign.encode('utf-8'),
                         hashlib.sha256).hexdigest()
    return format_authorization(credentials.access_key, scope,
                                signed_headers, signature)
