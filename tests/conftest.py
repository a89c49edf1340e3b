import datetime
import os

from pytest import fixture

from s3request.transport import Response, Transport


cmd_options_intiailized = False


def pytest_addoption(parser):
    global cmd_options_intiailized
    if cmd_options_intiailized:
        return
    env = os.environ.get
    parser.addoption('--s3-bucket',
                     default=env('S3REQUEST_TEST_BUCKET'),
                     help='AWS S3 bucket name for testing purpose '
                          '[default: %(default)s]')
    parser.addoption('--s3-region',
                     default=env('S3REQUEST_TEST_REGION', 'us-east-1'),
                     help='The region of the testing bucket '
                          '[default: %(default)s]')
    parser.addoption('--s3-profile',
                     default=env('S3REQUEST_TEST_PROFILE'),
                     help='The credential profile to access the testing '
                          'bucket.  the default chain if omitted '
                          '[default: %(default)s]')
    cmd_options_intiailized = True


def pytest_configure(config):
    config.addinivalue_line('markers', 'slow: tests talking to the real S3')


class FakeTransport(Transport):
    """Answers requests with scripted responses and records them."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, headers, body=None):
        self.requests.append((method, url, dict(headers), body))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def respond(status=200, body=b'', headers=None):
    return Response(status, headers or {}, body)


class FakeSleep(object):

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


#: The instant of the published Signature Version 4 examples.
EXAMPLE_TIME = datetime.datetime(2013, 5, 24, tzinfo=datetime.timezone.utc)


@fixture
def fx_sleep():
    return FakeSleep()


@fixture
def fx_clock():
    return lambda: EXAMPLE_TIME
