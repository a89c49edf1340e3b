""":mod:`s3request.executor` --- Signing, sending and retrying requests
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

:class:`RequestExecutor` signs a request, sends it through
a :class:`~s3request.transport.Transport`, and retries it while S3
answers ``500 Internal Server Error`` or ``503 Slow Down``.

Each attempt reads the clock once and signs with that instant, so
a retried request never reuses a stale signature.  The sleep before
retry ``i + 1`` is ``100 * 2 ** i`` milliseconds.  ``max_attempts``
counts requests, not retries: the default of 12 makes at most 12
requests with 11 sleeps between them, about 205 seconds in total.
There is no overall deadline: bound the whole
:meth:`~RequestExecutor.execute()` call if you need one.

"""
import datetime
import logging
import time

from . import canonical
from .region import Region, endpoint_host
from .signature import SECURITY_TOKEN_HEADER, format_timestamp, sign
from .transport import UrllibTransport

__all__ = ('BASE_DELAY_MS', 'BASE_URL_FORMAT', 'DEFAULT_MAX_ATTEMPTS',
           'METHODS', 'TRANSIENT_STATUSES',
           'ExecutionError', 'RequestExecutor', 'backoff_delay', 'utcnow')


#: (:class:`int`) How many requests are made at most by default.
DEFAULT_MAX_ATTEMPTS = 12

#: (:class:`int`) The sleep before the first retry in milliseconds.
#: It doubles on every retry.
BASE_DELAY_MS = 100

#: (:class:`frozenset`) The status codes worth retrying.
TRANSIENT_STATUSES = frozenset([500, 503])

#: (:class:`frozenset`) The supported HTTP methods.
METHODS = frozenset(['GET', 'PUT'])

#: (:class:`str`) The format string of the base url of the endpoints.
#: Contains no trailing slash.  Default is ``'https://{0}'``.
BASE_URL_FORMAT = 'https://{0}'


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


def backoff_delay(attempt_index):
    """Gets the sleep in milliseconds after the failed attempt of the
    0-based ``attempt_index``.

    >>> [backoff_delay(i) for i in range(4)]
    [100, 200, 400, 800]

    """
    return BASE_DELAY_MS * 2 ** attempt_index


class RequestExecutor(object):
    """Sends signed requests to S3 and retries transient failures.

    :param transport: the transport to send requests through.
                      :class:`~s3request.transport.UrllibTransport`
                      by default
    :type transport: :class:`~s3request.transport.Transport`
    :param sleep: the function to sleep the given seconds.
                  :func:`time.sleep()` by default
    :type sleep: :class:`~typing.Callable`
    :param clock: the function returning the current UTC time.
                  :func:`utcnow()` by default
    :type clock: :class:`~typing.Callable`
    :param resolver: the optional resolver to look up credentials on
                     every attempt when no credentials are passed to
                     :meth:`execute()`
    :type resolver: :class:`~s3request.credentials.CredentialResolver`
    :param profile: the profile name passed to the ``resolver``
    :type profile: :class:`str`

    """

    logger = logging.getLogger(__name__ + '.RequestExecutor')

    def __init__(self, transport=None, sleep=time.sleep, clock=utcnow,
                 resolver=None, profile=None):
        self.transport = transport or UrllibTransport()
        self.sleep = sleep
        self.clock = clock
        self.resolver = resolver
        self.profile = profile

    def get_url(self, host, path, query=None):
        url = BASE_URL_FORMAT.format(host) + canonical.encode_path(path)
        query_string = canonical.encode_query(query)
        if query_string:
            url += '?' + query_string
        return url

    def make_headers(self, method, host, time, payload_hash, credentials,
                     headers=None, body=None):
        """Makes every header of a single attempt except
        ``Authorization``.

        """
        result = {
            'Host': host,
            'x-amz-date': format_timestamp(time),
            'x-amz-content-sha256': payload_hash,
        }
        if credentials is not None and credentials.session_token:
            result[SECURITY_TOKEN_HEADER] = credentials.session_token
        if method == 'PUT':
            result['Content-Length'] = str(len(body or b''))
        if headers:
            # Header names are case-insensitive; a caller header replaces
            # the built-in one instead of being sent beside it.
            overridden = set(name.lower() for name in headers)
            result = dict((name, value) for name, value in result.items()
                          if name.lower() not in overridden)
            result.update(headers)
        return result

    def get_credentials(self, credentials):
        if credentials is None and self.resolver is not None:
            return self.resolver.resolve(self.profile)
        return credentials

    def attempt(self, method, path, credentials, region, headers, body,
                query, payload_hash):
        """Signs and sends the request once.

        :returns: the response
        :rtype: :class:`~s3request.transport.Response`

        """
        now = self.clock()
        host = endpoint_host(region)
        credentials = self.get_credentials(credentials)
        request_headers = self.make_headers(method, host, now, payload_hash,
                                            credentials, headers, body)
        if credentials is not None:
            canonical_request, signed_headers = canonical.build(
                method, path, query, request_headers, payload_hash
            )
            request_headers['Authorization'] = sign(
                canonical_request, signed_headers, credentials, region, now
            )
        url = self.get_url(host, path, query)
        return self.transport.request(method, url, request_headers, body)

    def execute(self, method, path, credentials=None,
                region=Region.US_EAST_1, headers=None, body=None,
                max_attempts=DEFAULT_MAX_ATTEMPTS, query=None):
        """Sends the request and returns the body of its successful
        response.

        :param method: ``'GET'`` or ``'PUT'``
        :type method: :class:`str`
        :param path: the object path e.g. ``'bucket/key.txt'``
        :type path: :class:`str`
        :param credentials: the credentials to sign with.  if it's
                            :const:`None` and there's no resolver the
                            request is sent unsigned
        :type credentials: :class:`~s3request.credentials.Credentials`
        :param region: the region of the endpoint
        :type region: :class:`~s3request.region.Region`
        :param headers: additional headers to send and sign
        :type headers: :class:`~typing.Mapping`
        :param body: the payload of ``PUT`` requests, already compressed
                     if it's meant to be
        :type body: :class:`bytes`
        :param max_attempts: how many requests are made at most,
                             counting the first one.  the default of 12
                             sleeps 11 times before giving up
        :type max_attempts: :class:`int`
        :param query: the query parameters
        :type query: :class:`~typing.Mapping`
        :returns: the response body
        :rtype: :class:`bytes`
        :raise ExecutionError: when the response isn't successful, or it
                               still fails transiently after
                               ``max_attempts`` requests
        :raise s3request.credentials.CredentialError: when credentials
                                                      can't be resolved

        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError('method must be one of {0!r}, not {1!r}'.format(
                sorted(METHODS), method
            ))
        if not path.startswith('/'):
            path = '/' + path
        payload_hash = canonical.payload_hash(body)
        attempt_index = 0
        while 1:
            response = self.attempt(method, path, credentials, region,
                                    headers, body, query, payload_hash)
            if 200 <= response.status < 300:
                return response.body
            if response.status in TRANSIENT_STATUSES and \
               attempt_index + 1 < max_attempts:
                delay = backoff_delay(attempt_index)
                self.logger.info('%s %s was rate limited (%d). '
                                 'Sleeping %d ms',
                                 method, path, response.status, delay)
                self.sleep(delay / 1000.0)
                attempt_index += 1
                continue
            self.logger.debug('%s %s failed (%d) after %d attempt(s)',
                              method, path, response.status,
                              attempt_index + 1)
            raise ExecutionError(method, path, response.status, response.body)


class ExecutionError(Exception):
    """Raised when S3 answers a request with an unsuccessful status.

    .. attribute:: method

       The HTTP method of the request.

    .. attribute:: path

       The requested path.

    .. attribute:: status

       The HTTP status code of the last response.

    .. attribute:: body

       The body of the last response (:class:`bytes`).

    """

    def __init__(self, method, path, status, body):
        super(ExecutionError, self).__init__(method, path, status, body)
        self.method = method
        self.path = path
        self.status = status
        self.body = body

    def __str__(self):
        return 'Failed to {0} s3:/{1} ({2}). Response was: {3}'.format(
            self.method.lower(), self.path, self.status,
            self.body.decode('utf-8', 'replace')
        )
