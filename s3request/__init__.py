""":mod:`s3request` --- Signed requests for AWS S3
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

This package signs and sends object-storage requests to the regional
AWS S3 endpoints without any pre-established session.  Every request
carries its own `Signature Version 4`__ authorization computed from
credentials that are looked up in the local profile store or fetched
from the instance metadata service.

Transient server errors (500 and 503) are retried with an exponential
backoff, so a caller only has to do::

    from s3request.client import S3Client

    client = S3Client(profile='work')
    client.put('bucket/greeting.txt', b'hello', content_type='text/plain')
    assert client.get('bucket/greeting.txt') == b'hello'

__ https://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-authenticating-requests.html

"""
