""":mod:`s3request.canonical` --- Canonical requests
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Pure functions turning a pending request into the canonical request
string that `Signature Version 4`__ signs.  Every byte matters here: any
difference from what S3 computes on its side makes the signature fail.

__ https://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-header-based-auth.html

"""
import hashlib

__all__ = ('EMPTY_PAYLOAD_HASH',
           'build', 'canonical_headers', 'encode_path', 'encode_query',
           'payload_hash', 'uri_encode')


#: (:class:`str`) The hex SHA-256 digest of the empty string, which is
#: the payload hash of requests without body.
EMPTY_PAYLOAD_HASH = \
    'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

_UNRESERVED = frozenset(b'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                        b'abcdefghijklmnopqrstuvwxyz'
                        b'0123456789_-~.')

_HEXDIGITS = frozenset(b'0123456789abcdefABCDEF')


def payload_hash(body):
    """Gets the hex SHA-256 digest of the ``body``.

    :param body: the payload, or :const:`None` if there's no body
    :type body: :class:`bytes`
    :rtype: :class:`str`

    """
    if body is None:
        return EMPTY_PAYLOAD_HASH
    return hashlib.sha256(body).hexdigest()


def _to_bytes(string):
    if isinstance(string, bytes):
        return string
    return string.encode('utf-8')


def uri_encode(string, encode_slash=True):
    """Percent-encodes every byte of the UTF-8 ``string`` except
    unreserved characters (and slashes unless ``encode_slash`` is set).

    >>> uri_encode('a b/c')
    'a%20b%2Fc'
    >>> uri_encode('a b/c', encode_slash=False)
    'a%20b/c'

    """
    to_hex = '%{0:02X}'.format
    chunks = []
    for byte in _to_bytes(string):
        if byte in _UNRESERVED or byte == 0x2f and not encode_slash:
            chunks.append(chr(byte))
        else:
            chunks.append(to_hex(byte))
    return ''.join(chunks)


def encode_path(path):
    """Percent-encodes the request ``path``.  Paths may arrive already
    escaped, so a ``%`` followed by two hexadecimal digits is kept as it
    is.  A bare ``%`` becomes ``%25``.  Applying it twice gives the same
    result as applying it once.

    >>> encode_path('/photos/my%20cat $1.jpg')
    '/photos/my%20cat%20%241.jpg'
    >>> encode_path('/100%')
    '/100%25'

    :param path: the path to encode
    :type path: :class:`str`
    :rtype: :class:`str`

    """
    data = _to_bytes(path)
    length = len(data)
    to_hex = '%{0:02X}'.format
    chunks = []
    for i, byte in enumerate(data):
        if byte in _UNRESERVED or byte == 0x2f:
            chunks.append(chr(byte))
        elif byte == 0x25:
            if i + 2 < length and data[i + 1] in _HEXDIGITS and \
               data[i + 2] in _HEXDIGITS:
                chunks.append('%')
            else:
                chunks.append('%25')
        else:
            chunks.append(to_hex(byte))
    return ''.join(chunks)


def encode_query(query):
    r"""Makes the canonical query string.  Parameters are sorted by their
    encoded names (then values) using plain byte order.  A parameter
    without values is encoded as having one empty value, so every name
    is followed by ``=``.

    >>> encode_query({'prefix': ['J'], 'max-keys': ['2']})
    'max-keys=2&prefix=J'
    >>> encode_query({'lifecycle': []})
    'lifecycle='

    :param query: the query parameters
    :type query: :class:`~typing.Mapping`\ [:class:`str`,
                 :class:`~typing.Sequence`\ [:class:`str`]]
    :rtype: :class:`str`

    """
    if not query:
        return ''
    pairs = []
    for key, values in query.items():
        if isinstance(values, str):
            values = [values]
        for value in values or ['']:
            pairs.append((uri_encode(key), uri_encode(value)))
    pairs.sort(key=lambda pair: (pair[0].encode('ascii'),
                                 pair[1].encode('ascii')))
    return '&'.join('{0}={1}'.format(k, v) for k, v in pairs)


def canonical_headers(headers):
    """Makes the canonical header block and the signed header list.
    Names are lowercased, values are stripped, and lines are sorted by
    name.  Repeated names are not merged but kept as separate lines.

    :param headers: the header mapping, or a sequence of pairs
    :returns: a pair of the header block (each line ends with a newline)
              and the ``;``-separated signed header names
    :rtype: :class:`tuple`

    """
    if hasattr(headers, 'items'):
        headers = headers.items()
    pairs = [(name.strip().lower(), str(value).strip())
             for name, value in headers]
    pairs.sort(key=lambda pair: pair[0].encode('utf-8'))
    line = '{0}:{1}\n'.format
    block = ''.join(line(k, v) for k, v in pairs)
    signed_headers = ';'.join(k for k, _ in pairs)
    return block, signed_headers


def build(method, path, query, headers, payload_hash):
    """Builds the canonical request::

        <METHOD>
        <encoded path>
        <canonical query string>
        <canonical headers, one line each>

        <signed headers>
        <payload hash>

    :param method: the HTTP method
    :type method: :class:`str`
    :param path: the request path, possibly already escaped
    :type path: :class:`str`
    :param query: the query parameters.  can be :const:`None`
    :type query: :class:`~typing.Mapping`
    :param headers: all headers to sign
    :type headers: :class:`~typing.Mapping`
    :param payload_hash: the hex SHA-256 digest of the payload
    :type payload_hash: :class:`str`
    :returns: a pair of the canonical request and the signed header names
    :rtype: :class:`tuple`

    """
    header_block, signed_headers = canonical_headers(headers)
    canonical_request = '\n'.join([
        method.upper(),
        encode_path(path),
        encode_query(query),
        header_block,
        signed_headers,
        payload_hash
    ])
    return canonical_request, signed_headers
