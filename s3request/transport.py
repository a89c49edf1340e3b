""":mod:`s3request.transport` --- HTTP exchange
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

The signing code never opens connections by itself.  It hands fully
signed requests to a :class:`Transport` which returns a
:class:`Response`.  :class:`UrllibTransport` is the default and uses
:mod:`urllib.request`; tests replace it with a scripted fake.

"""
import collections
import logging
from urllib import request as urllib2

__all__ = 'Response', 'Transport', 'UrllibTransport'


#: (:class:`collections.namedtuple`) The status code, the header mapping
#: and the body bytes of an HTTP response.
Response = collections.namedtuple('Response', ['status', 'headers', 'body'])


class Transport(object):
    """The interface of HTTP transports.  Implementations have to
    override :meth:`request()`.

    """

    def request(self, method, url, headers, body=None):
        """Sends a request and waits for its whole response.

        :param method: ``'GET'`` or ``'PUT'``
        :type method: :class:`str`
        :param url: the absolute url to request
        :type url: :class:`str`
        :param headers: the header mapping to send as it is
        :type headers: :class:`~typing.Mapping`
        :param body: the optional payload to send
        :type body: :class:`bytes`
        :returns: the response, whatever its status code is
        :rtype: :class:`Response`
        :raise IOError: when the server cannot be reached

        .. note::

           This is an abstract method which has to be implemented
           (overridden) by subclasses.

        """
        raise NotImplementedError('request() has to be implemented')


class UrllibTransport(Transport):
    """:class:`Transport` on top of :mod:`urllib.request`.

    :param timeout: the optional socket timeout in seconds
    :type timeout: :class:`numbers.Real`

    """

    logger = logging.getLogger(__name__ + '.UrllibTransport')

    def __init__(self, timeout=None):
        self.timeout = timeout

    def request(self, method, url, headers, body=None):
        request = urllib2.Request(url, data=body, headers=dict(headers),
                                  method=method)
        kwargs = {}
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout
        try:
            response = urllib2.urlopen(request, **kwargs)
        except urllib2.HTTPError as e:
            # Non-2xx responses still have to be classified by the caller.
            try:
                data = e.read()
            finally:
                e.close()
            self.logger.debug('%s %s -> %d', method, url, e.code)
            return Response(e.code, dict(e.headers.items()), data)
        with response:
            data = response.read()
            self.logger.debug('%s %s -> %d', method, url, response.status)
            return Response(response.status, dict(response.headers.items()),
                            data)
