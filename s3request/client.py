""":mod:`s3request.client` --- Getting and putting objects
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

A thin facade over :class:`~s3request.executor.RequestExecutor` for the
two operations this package supports: downloading an object and
uploading one, optionally gzip-compressed.

"""
import gzip as gzip_module
import logging

from .credentials import CredentialResolver
from .executor import DEFAULT_MAX_ATTEMPTS, RequestExecutor
from .region import Region

__all__ = 'S3Client', 'gzip_data'


def gzip_data(data, level=None):
    """Compresses the ``data`` in gzip format.  The header carries no
    file name and a zero modification time, so the same input always
    gives the same output (and the same payload hash).

    :param data: the data to compress
    :type data: :class:`bytes`
    :param level: the compression level from 1 to 9.  9 by default
    :type level: :class:`int`
    :rtype: :class:`bytes`

    """
    if level is None:
        level = 9
    return gzip_module.compress(data, compresslevel=level, mtime=0)


class S3Client(object):
    """Gets and puts S3 objects in a region.

    :param region: the region of the buckets to access
    :type region: :class:`~s3request.region.Region`
    :param credentials: the credentials to sign with.  if it's omitted
                        and neither ``profile`` nor ``resolver`` is
                        given, requests are sent unsigned
    :type credentials: :class:`~s3request.credentials.Credentials`
    :param profile: the profile to resolve credentials from on every
                    request
    :type profile: :class:`str`
    :param resolver: the resolver to look up credentials on every
                     request.  a default
                     :class:`~s3request.credentials.CredentialResolver`
                     is made if only ``profile`` is given
    :type resolver: :class:`~s3request.credentials.CredentialResolver`
    :param executor: the executor to send requests with
    :type executor: :class:`~s3request.executor.RequestExecutor`
    :param max_attempts: how many requests are made at most for each
                         operation
    :type max_attempts: :class:`int`

    """

    logger = logging.getLogger(__name__ + '.S3Client')

    def __init__(self, region=Region.US_EAST_1, credentials=None,
                 profile=None, resolver=None, executor=None,
                 max_attempts=DEFAULT_MAX_ATTEMPTS):
        self.region = region
        self.credentials = credentials
        if executor is None:
            if resolver is None and profile is not None:
                resolver = CredentialResolver()
            executor = RequestExecutor(resolver=resolver, profile=profile)
        self.executor = executor
        self.max_attempts = max_attempts

    def get(self, path):
        """Downloads the object at the ``path``.

        :param path: the object path e.g. ``'bucket/key.txt'``
        :type path: :class:`str`
        :returns: the object data
        :rtype: :class:`bytes`
        :raise s3request.executor.ExecutionError: when it fails

        """
        return self.executor.execute(
            'GET', path,
            credentials=self.credentials,
            region=self.region,
            max_attempts=self.max_attempts
        )

    def put(self, path, data, content_type=None, gzip=False, acl=None,
            cache_control=None):
        """Uploads the ``data`` to the ``path``.

        :param path: the object path e.g. ``'bucket/key.txt'``
        :type path: :class:`str`
        :param data: the object data
        :type data: :class:`bytes`
        :param content_type: the optional :mailheader:`Content-Type`
        :type content_type: :class:`str`
        :param gzip: compress the ``data`` and send it with
                     ``Content-Encoding: gzip``
        :type gzip: :class:`bool`
        :param acl: the optional canned acl e.g. ``'public-read'``
        :type acl: :class:`str`
        :param cache_control: the optional :mailheader:`Cache-Control`
        :type cache_control: :class:`str`
        :raise s3request.executor.ExecutionError: when it fails

        """
        headers = {}
        if content_type is not None:
            headers['Content-Type'] = content_type
        if gzip:
            headers['Content-Encoding'] = 'gzip'
            data = gzip_data(data)
            self.logger.getChild('put').debug('compressed %s to %d bytes',
                                              path, len(data))
        if cache_control is not None:
            headers['Cache-Control'] = cache_control
        if acl is not None:
            headers['x-amz-acl'] = acl
        self.executor.execute(
            'PUT', path,
            credentials=self.credentials,
            region=self.region,
            headers=headers,
            body=data,
            max_attempts=self.max_attempts
        )
