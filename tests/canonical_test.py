from pytest import mark

from s3request.canonical import (EMPTY_PAYLOAD_HASH, build, canonical_headers,
                                 encode_path, encode_query, payload_hash,
                                 uri_encode)


def test_payload_hash():
    assert payload_hash(None) == EMPTY_PAYLOAD_HASH
    assert payload_hash(b'') == EMPTY_PAYLOAD_HASH
    assert payload_hash(b'Welcome to Amazon S3.') == \
        '44ce7dd67c959e0d3524ffac1771dfbba87d2b6b4b4e99e42034a8b803f8b072'


def test_uri_encode():
    assert uri_encode('AZaz09_-~.') == 'AZaz09_-~.'
    assert uri_encode('a b/c') == 'a%20b%2Fc'
    assert uri_encode('a b/c', encode_slash=False) == 'a%20b/c'
    assert uri_encode('caf\xe9') == 'caf%C3%A9'


@mark.parametrize(('path', 'expected'), [
    ('/', '/'),
    ('/test.txt', '/test.txt'),
    ('/test$file.text', '/test%24file.text'),
    ('/a b+c', '/a%20b%2Bc'),
    ('/photos/my%20cat.jpg', '/photos/my%20cat.jpg'),
    ('/already%2fescaped', '/already%2fescaped'),
    ('/100%', '/100%25'),
    ('/50%off', '/50%25off'),
    ('/%zz', '/%25zz'),
    ('/%4', '/%254'),
    ('/end%41', '/end%41'),
    ('/über', '/%C3%BCber'),
])
def test_encode_path(path, expected):
    assert encode_path(path) == expected


@mark.parametrize('path', [
    '/test$file.text', '/100%', '/50%off', '/a b/%2F/über', '/%%%41'
])
def test_encode_path_idempotent(path):
    once = encode_path(path)
    assert encode_path(once) == once


def test_encode_query_empty():
    assert encode_query(None) == ''
    assert encode_query({}) == ''


def test_encode_query_valueless_key():
    assert encode_query({'lifecycle': []}) == 'lifecycle='
    assert encode_query({'acl': [], 'versionId': ['3']}) == \
        'acl=&versionId=3'


def test_encode_query_order_independent():
    a = {'prefix': ['J'], 'max-keys': ['2'], 'delimiter': ['/']}
    b = {'delimiter': ['/'], 'max-keys': ['2'], 'prefix': ['J']}
    assert list(a) != list(b)
    assert encode_query(a) == encode_query(b) == \
        'delimiter=%2F&max-keys=2&prefix=J'


def test_encode_query_byte_order():
    # Uppercase letters sort before lowercase ones in byte order.
    assert encode_query({'b': ['1'], 'B': ['2'], 'a': ['3']}) == \
        'B=2&a=3&b=1'


def test_encode_query_multiple_values():
    assert encode_query({'k': ['b', 'a'], 'j': 'x y'}) == 'j=x%20y&k=a&k=b'


def test_canonical_headers():
    block, signed = canonical_headers({
        'X-Amz-Date': '20130524T000000Z',
        'Host': ' examplebucket.s3.amazonaws.com ',
        'Range': 'bytes=0-9',
    })
    assert block == ('host:examplebucket.s3.amazonaws.com\n'
                     'range:bytes=0-9\n'
                     'x-amz-date:20130524T000000Z\n')
    assert signed == 'host;range;x-amz-date'


def test_canonical_headers_duplicates_not_merged():
    block, signed = canonical_headers([('X-Foo', 'a'), ('Host', 'h'),
                                       ('x-foo', 'b')])
    assert block == 'host:h\nx-foo:a\nx-foo:b\n'
    assert signed == 'host;x-foo;x-foo'


def test_build():
    canonical_request, signed = build(
        'get', '/test.txt', None,
        {'Host': 'examplebucket.s3.amazonaws.com',
         'x-amz-date': '20130524T000000Z',
         'x-amz-content-sha256': EMPTY_PAYLOAD_HASH},
        EMPTY_PAYLOAD_HASH
    )
    assert signed == 'host;x-amz-content-sha256;x-amz-date'
    assert canonical_request == '\n'.join([
        'GET',
        '/test.txt',
        '',
        'host:examplebucket.s3.amazonaws.com',
        'x-amz-content-sha256:' + EMPTY_PAYLOAD_HASH,
        'x-amz-date:20130524T000000Z',
        '',
        'host;x-amz-content-sha256;x-amz-date',
        EMPTY_PAYLOAD_HASH,
    ])
