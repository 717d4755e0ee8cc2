import pytest

from restlink.builder import RequestBuilder
from restlink.datamodel import TransportResponse
from restlink.transport.transport_abc import TransportABC


class FakeTransport(TransportABC):
	"""Records every descriptor and replies with a canned response, or raises `error`."""

	def __init__(self, status_code=200, body=None, headers=None, error=None):
		self.StatusCode = status_code
		self.Body = body
		self.Headers = headers
		self.Error = error
		self.Requests = []


	async def send(self, descriptor):
		self.Requests.append(descriptor)
		if self.Error is not None:
			raise self.Error
		return TransportResponse(status_code=self.StatusCode, headers=self.Headers), self.Body


@pytest.fixture
def transport():
	return FakeTransport()


@pytest.fixture
def builder(transport):
	return RequestBuilder(transport)


class Recorder(object):
	"""A callback that remembers every (error, result, response) it receives."""

	def __init__(self):
		self.Calls = []

	def __call__(self, error, result, response):
		self.Calls.append((error, result, response))


@pytest.fixture
def recorder():
	return Recorder()
